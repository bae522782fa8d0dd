from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, Optional, TypeVar, Union

from svdenc.svd.enums import (
    Access,
    AddressBlockUsage,
    BitRangeType,
    DataType,
    Endian,
    ModifiedWriteValues,
    Protection,
    ReadAction,
    Usage,
)

T = TypeVar("T")


@dataclass(frozen=True)
class RegisterProperties:
    size: Optional[int] = None
    access: Optional[Access] = None
    protection: Optional[Protection] = None
    reset_value: Optional[int] = None
    reset_mask: Optional[int] = None


@dataclass(frozen=True)
class EnumeratedValue:
    name: str
    description: Optional[str] = None
    value: Optional[int] = None
    is_default: Optional[bool] = None


@dataclass(frozen=True)
class EnumeratedValues:
    name: Optional[str] = None
    header_enum_name: Optional[str] = None
    usage: Optional[Usage] = None
    derived_from: Optional[str] = None
    values: tuple[EnumeratedValue, ...] = ()


@dataclass(frozen=True)
class DimArrayIndex:
    header_enum_name: Optional[str] = None
    values: tuple[EnumeratedValue, ...] = ()


@dataclass(frozen=True)
class DimElement:
    dim: int
    dim_increment: int
    dim_index: Optional[tuple[str, ...]] = None
    dim_name: Optional[str] = None
    dim_array_index: Optional[DimArrayIndex] = None


@dataclass(frozen=True)
class Single(Generic[T]):
    """A plain (non-array) peripheral, register, cluster or field."""
    info: T

    @property
    def name(self) -> str:
        return self.info.name

    @property
    def address_offset(self) -> int:
        return self.info.address_offset


@dataclass(frozen=True)
class Array(Generic[T]):
    """An entity replicated `dim.dim` times, described once."""
    info: T
    dim: DimElement

    @property
    def name(self) -> str:
        return self.info.name

    @property
    def address_offset(self) -> int:
        return self.info.address_offset


MaybeArray = Union[Single[T], Array[T]]


@dataclass(frozen=True)
class WriteAsRead:
    value: bool


@dataclass(frozen=True)
class UseEnumeratedValues:
    value: bool


@dataclass(frozen=True)
class WriteConstraintRange:
    min: int
    max: int


WriteConstraint = Union[WriteAsRead, UseEnumeratedValues, WriteConstraintRange]


@dataclass(frozen=True)
class BitRange:
    offset: int
    width: int
    range_type: BitRangeType = BitRangeType.OffsetWidth

    @property
    def lsb(self) -> int:
        return self.offset

    @property
    def msb(self) -> int:
        return self.offset + self.width - 1

    @classmethod
    def from_msb_lsb(cls, msb: int, lsb: int, range_type: BitRangeType = BitRangeType.MsbLsb) -> BitRange:
        return cls(offset=lsb, width=msb - lsb + 1, range_type=range_type)


@dataclass(frozen=True)
class FieldInfo:
    name: str
    bit_range: BitRange
    description: Optional[str] = None
    access: Optional[Access] = None
    modified_write_values: Optional[ModifiedWriteValues] = None
    write_constraint: Optional[WriteConstraint] = None
    read_action: Optional[ReadAction] = None
    enumerated_values: tuple[EnumeratedValues, ...] = ()
    derived_from: Optional[str] = None

    @property
    def bit_offset(self) -> int:
        return self.bit_range.offset


Field = MaybeArray[FieldInfo]


@dataclass(frozen=True)
class RegisterInfo:
    name: str
    address_offset: int
    display_name: Optional[str] = None
    description: Optional[str] = None
    alternate_group: Optional[str] = None
    alternate_register: Optional[str] = None
    properties: RegisterProperties = field(default_factory=RegisterProperties)
    data_type: Optional[DataType] = None
    modified_write_values: Optional[ModifiedWriteValues] = None
    write_constraint: Optional[WriteConstraint] = None
    read_action: Optional[ReadAction] = None
    fields: Optional[tuple[Field, ...]] = None
    derived_from: Optional[str] = None


@dataclass(frozen=True)
class ClusterInfo:
    name: str
    address_offset: int
    description: Optional[str] = None
    alternate_cluster: Optional[str] = None
    header_struct_name: Optional[str] = None
    default_register_properties: RegisterProperties = field(default_factory=RegisterProperties)
    children: tuple[RegisterCluster, ...] = ()
    derived_from: Optional[str] = None


Register = MaybeArray[RegisterInfo]
Cluster = MaybeArray[ClusterInfo]
RegisterCluster = Union[Register, Cluster]


def is_register(rc: RegisterCluster) -> bool:
    return isinstance(rc.info, RegisterInfo)


def is_cluster(rc: RegisterCluster) -> bool:
    return isinstance(rc.info, ClusterInfo)


@dataclass(frozen=True)
class AddressBlock:
    offset: int
    size: int
    usage: AddressBlockUsage = AddressBlockUsage.Registers
    protection: Optional[Protection] = None


@dataclass(frozen=True)
class Interrupt:
    name: str
    value: int
    description: Optional[str] = None


@dataclass(frozen=True)
class PeripheralInfo:
    name: str
    base_address: int
    display_name: Optional[str] = None
    version: Optional[str] = None
    description: Optional[str] = None
    alternate_peripheral: Optional[str] = None
    group_name: Optional[str] = None
    prepend_to_name: Optional[str] = None
    append_to_name: Optional[str] = None
    header_struct_name: Optional[str] = None
    default_register_properties: RegisterProperties = field(default_factory=RegisterProperties)
    address_block: Optional[tuple[AddressBlock, ...]] = None
    interrupt: tuple[Interrupt, ...] = ()
    registers: Optional[tuple[RegisterCluster, ...]] = None
    derived_from: Optional[str] = None


Peripheral = MaybeArray[PeripheralInfo]


@dataclass(frozen=True)
class Cpu:
    name: str
    revision: str
    endian: Endian
    mpu_present: bool
    fpu_present: bool
    nvic_priority_bits: int
    has_vendor_systick: bool
    fpu_double_precision: Optional[bool] = None
    dsp_present: Optional[bool] = None
    icache_present: Optional[bool] = None
    dcache_present: Optional[bool] = None
    vtor_present: Optional[bool] = None
    device_num_interrupts: Optional[int] = None


@dataclass(frozen=True)
class Device:
    name: str
    peripherals: tuple[Peripheral, ...] = ()
    schema_version: str = "1.1"
    vendor: Optional[str] = None
    vendor_id: Optional[str] = None
    series: Optional[str] = None
    version: Optional[str] = None
    description: Optional[str] = None
    license_text: Optional[str] = None
    cpu: Optional[Cpu] = None
    header_system_filename: Optional[str] = None
    header_definitions_prefix: Optional[str] = None
    address_unit_bits: Optional[int] = None
    width: Optional[int] = None
    default_register_properties: RegisterProperties = field(default_factory=RegisterProperties)
