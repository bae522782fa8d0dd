from __future__ import annotations

from enum import Enum
from typing import Optional, Type, TypeVar

__all__ = [
    'Access', 'AddressBlockUsage', 'BitRangeType', 'DataType', 'Endian',
    'ModifiedWriteValues', 'Protection', 'ReadAction', 'Usage',
]

E = TypeVar("E", bound="SvdEnum")


class SvdEnum(Enum):
    """Closed vocabulary whose member values are the schema strings."""

    def to_str(self) -> str:
        return self.value

    @classmethod
    def from_str(cls: Type[E], s: str) -> Optional[E]:
        try:
            return cls(s)
        except ValueError:
            return None


class Access(SvdEnum):
    ReadOnly = "read-only"
    ReadWrite = "read-write"
    ReadWriteOnce = "read-writeOnce"
    WriteOnce = "writeOnce"
    WriteOnly = "write-only"

    @classmethod
    def default(cls) -> Access:
        return cls.ReadWrite

    def can_read(self) -> bool:
        """Whether the register/field is readable at least once."""
        if self is Access.ReadOnly:
            return True
        if self is Access.ReadWrite:
            return True
        if self is Access.ReadWriteOnce:
            return True
        if self is Access.WriteOnce:
            return False
        if self is Access.WriteOnly:
            return False
        raise AssertionError(f"unhandled access {self!r}")

    def can_write(self) -> bool:
        """Whether the register/field is writable at least once."""
        if self is Access.ReadOnly:
            return False
        if self is Access.ReadWrite:
            return True
        if self is Access.ReadWriteOnce:
            return True
        if self is Access.WriteOnce:
            return True
        if self is Access.WriteOnly:
            return True
        raise AssertionError(f"unhandled access {self!r}")


class ModifiedWriteValues(SvdEnum):
    OneToClear = "oneToClear"
    OneToSet = "oneToSet"
    OneToToggle = "oneToToggle"
    ZeroToClear = "zeroToClear"
    ZeroToSet = "zeroToSet"
    ZeroToToggle = "zeroToToggle"
    Clear = "clear"
    Set = "set"
    Modify = "modify"

    @classmethod
    def default(cls) -> ModifiedWriteValues:
        return cls.Modify


class ReadAction(SvdEnum):
    Clear = "clear"
    Set = "set"
    Modify = "modify"
    ModifyExternal = "modifyExternal"


class Usage(SvdEnum):
    Read = "read"
    Write = "write"
    ReadWrite = "read-write"

    @classmethod
    def default(cls) -> Usage:
        return cls.ReadWrite


class AddressBlockUsage(SvdEnum):
    Registers = "registers"
    Buffer = "buffer"
    Reserved = "reserved"


class Protection(SvdEnum):
    Secure = "s"
    NonSecure = "n"
    Privileged = "p"


class Endian(SvdEnum):
    Little = "little"
    Big = "big"
    Selectable = "selectable"
    Other = "other"


class DataType(SvdEnum):
    U8 = "uint8_t"
    U16 = "uint16_t"
    U32 = "uint32_t"
    U64 = "uint64_t"
    I8 = "int8_t"
    I16 = "int16_t"
    I32 = "int32_t"
    I64 = "int64_t"
    U8Ptr = "uint8_t *"
    U16Ptr = "uint16_t *"
    U32Ptr = "uint32_t *"
    U64Ptr = "uint64_t *"
    I8Ptr = "int8_t *"
    I16Ptr = "int16_t *"
    I32Ptr = "int32_t *"
    I64Ptr = "int64_t *"


class BitRangeType(SvdEnum):
    """How a field's bit position was written in the source document."""
    BitRange = "bitRange"
    OffsetWidth = "bitOffset"
    MsbLsb = "lsb"
