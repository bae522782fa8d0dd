from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Callable, Optional, Type, TypeVar

from svdenc.svd.enums import (
    Access,
    AddressBlockUsage,
    BitRangeType,
    DataType,
    Endian,
    ModifiedWriteValues,
    Protection,
    ReadAction,
    SvdEnum,
    Usage,
)
from svdenc.svd.model import (
    AddressBlock,
    Array,
    BitRange,
    ClusterInfo,
    Cpu,
    Device,
    DimArrayIndex,
    DimElement,
    EnumeratedValue,
    EnumeratedValues,
    FieldInfo,
    Interrupt,
    PeripheralInfo,
    RegisterCluster,
    RegisterInfo,
    RegisterProperties,
    Single,
    UseEnumeratedValues,
    WriteAsRead,
    WriteConstraint,
    WriteConstraintRange,
)
from svdenc.utils.logger import get_logger

log = get_logger(__name__)

E = TypeVar("E", bound=SvdEnum)
T = TypeVar("T")

_BIT_RANGE = re.compile(r"^\[\s*(\d+)\s*:\s*(\d+)\s*\]$")


class SvdParseError(ValueError):
    """Raised when an SVD document does not describe a valid model."""
    pass


def _t(node: Optional[ET.Element], tag: str) -> Optional[str]:
    if node is None:
        return None
    e = node.find(tag)
    return e.text.strip() if (e is not None and e.text) else None


def _req(node: ET.Element, tag: str) -> str:
    v = _t(node, tag)
    if v is None:
        raise SvdParseError(f"<{node.tag}> is missing required <{tag}>")
    return v


def parse_int(s: str) -> int:
    """Parse an SVD scaled integer: decimal, 0x hex, 0b or #-prefixed binary.

    Don't-care bits (`x`) in a #-binary literal read as 0, so `#1x0` loads
    as 4 and the mask of ignored bits is not kept.
    """
    s = s.strip()
    if s.startswith("#"):
        # binary, 'x' marks a don't-care bit
        return int(s[1:].replace("x", "0").replace("X", "0"), 2)
    if s.isdigit():
        return int(s, 10)
    try:
        return int(s, 0)
    except ValueError:
        pass
    # some SVDs use hex without 0x
    try:
        return int(s, 16)
    except ValueError:
        raise SvdParseError(f"not an integer: {s!r}") from None


def _int(node: Optional[ET.Element], tag: str) -> Optional[int]:
    s = _t(node, tag)
    return None if s is None else parse_int(s)


def _bool(node: Optional[ET.Element], tag: str) -> Optional[bool]:
    s = _t(node, tag)
    if s is None:
        return None
    if s.lower() in ("true", "1"):
        return True
    if s.lower() in ("false", "0"):
        return False
    raise SvdParseError(f"<{tag}>: not a boolean: {s!r}")


def _enum(node: Optional[ET.Element], tag: str, cls: Type[E]) -> Optional[E]:
    s = _t(node, tag)
    if s is None:
        return None
    v = cls.from_str(s)
    if v is None:
        raise SvdParseError(f"<{tag}>: unknown {cls.__name__} {s!r}")
    return v


def parse_register_properties(node: ET.Element) -> RegisterProperties:
    return RegisterProperties(
        size=_int(node, "size"),
        access=_enum(node, "access", Access),
        protection=_enum(node, "protection", Protection),
        reset_value=_int(node, "resetValue"),
        reset_mask=_int(node, "resetMask"),
    )


def parse_enumerated_value(node: ET.Element) -> EnumeratedValue:
    return EnumeratedValue(
        name=_req(node, "name"),
        description=_t(node, "description"),
        value=_int(node, "value"),
        is_default=_bool(node, "isDefault"),
    )


def parse_enumerated_values(node: ET.Element) -> EnumeratedValues:
    return EnumeratedValues(
        name=_t(node, "name"),
        header_enum_name=_t(node, "headerEnumName"),
        usage=_enum(node, "usage", Usage),
        derived_from=node.get("derivedFrom"),
        values=tuple(parse_enumerated_value(e) for e in node.findall("enumeratedValue")),
    )


def _dim_index(s: str) -> tuple[str, ...]:
    m = re.match(r"^(\d+)-(\d+)$", s)
    if m:
        return tuple(str(i) for i in range(int(m.group(1)), int(m.group(2)) + 1))
    m = re.match(r"^([A-Z])-([A-Z])$", s)
    if m:
        return tuple(chr(c) for c in range(ord(m.group(1)), ord(m.group(2)) + 1))
    return tuple(i.strip() for i in s.split(","))


def parse_dim(node: ET.Element) -> Optional[DimElement]:
    dim = _int(node, "dim")
    if dim is None:
        return None
    increment = _int(node, "dimIncrement")
    if increment is None:
        raise SvdParseError(f"<{node.tag}> has <dim> without <dimIncrement>")

    dai = None
    dai_node = node.find("dimArrayIndex")
    if dai_node is not None:
        dai = DimArrayIndex(
            header_enum_name=_t(dai_node, "headerEnumName"),
            values=tuple(parse_enumerated_value(e) for e in dai_node.findall("enumeratedValue")),
        )

    index = _t(node, "dimIndex")
    return DimElement(
        dim=dim,
        dim_increment=increment,
        dim_index=_dim_index(index) if index is not None else None,
        dim_name=_t(node, "dimName"),
        dim_array_index=dai,
    )


def _maybe_array(node: ET.Element, info: T):
    dim = parse_dim(node)
    return Single(info) if dim is None else Array(info, dim)


def parse_write_constraint(node: Optional[ET.Element]) -> Optional[WriteConstraint]:
    if node is None:
        return None
    war = _bool(node, "writeAsRead")
    if war is not None:
        return WriteAsRead(war)
    uev = _bool(node, "useEnumeratedValues")
    if uev is not None:
        return UseEnumeratedValues(uev)
    rng = node.find("range")
    if rng is not None:
        return WriteConstraintRange(min=parse_int(_req(rng, "minimum")), max=parse_int(_req(rng, "maximum")))
    raise SvdParseError("<writeConstraint> is empty")


def parse_bit_range(node: ET.Element) -> BitRange:
    offset = _int(node, "bitOffset")
    if offset is not None:
        width = _int(node, "bitWidth")
        return BitRange(offset=offset, width=1 if width is None else width, range_type=BitRangeType.OffsetWidth)

    lsb, msb = _int(node, "lsb"), _int(node, "msb")
    if lsb is not None and msb is not None:
        return BitRange.from_msb_lsb(msb, lsb, BitRangeType.MsbLsb)

    text = _t(node, "bitRange")
    if text is not None:
        m = _BIT_RANGE.match(text)
        if not m:
            raise SvdParseError(f"invalid bitRange {text!r}")
        return BitRange.from_msb_lsb(int(m.group(1)), int(m.group(2)), BitRangeType.BitRange)

    raise SvdParseError(f"field {_t(node, 'name')!r} has no bit range")


def parse_field(node: ET.Element):
    info = FieldInfo(
        name=_req(node, "name"),
        description=_t(node, "description"),
        bit_range=parse_bit_range(node),
        access=_enum(node, "access", Access),
        modified_write_values=_enum(node, "modifiedWriteValues", ModifiedWriteValues),
        write_constraint=parse_write_constraint(node.find("writeConstraint")),
        read_action=_enum(node, "readAction", ReadAction),
        enumerated_values=tuple(parse_enumerated_values(e) for e in node.findall("enumeratedValues")),
        derived_from=node.get("derivedFrom"),
    )
    return _maybe_array(node, info)


def parse_register(node: ET.Element):
    fields_node = node.find("fields")
    info = RegisterInfo(
        name=_req(node, "name"),
        display_name=_t(node, "displayName"),
        description=_t(node, "description"),
        alternate_group=_t(node, "alternateGroup"),
        alternate_register=_t(node, "alternateRegister"),
        address_offset=parse_int(_req(node, "addressOffset")),
        properties=parse_register_properties(node),
        data_type=_enum(node, "dataType", DataType),
        modified_write_values=_enum(node, "modifiedWriteValues", ModifiedWriteValues),
        write_constraint=parse_write_constraint(node.find("writeConstraint")),
        read_action=_enum(node, "readAction", ReadAction),
        fields=None if fields_node is None else tuple(parse_field(f) for f in fields_node.findall("field")),
        derived_from=node.get("derivedFrom"),
    )
    return _maybe_array(node, info)


def parse_register_cluster(parent: ET.Element) -> tuple[RegisterCluster, ...]:
    out: list[RegisterCluster] = []
    # document order, registers and clusters interleaved
    for child in parent:
        if child.tag == "register":
            out.append(parse_register(child))
        elif child.tag == "cluster":
            out.append(parse_cluster(child))
    return tuple(out)


def parse_cluster(node: ET.Element):
    info = ClusterInfo(
        name=_req(node, "name"),
        description=_t(node, "description"),
        alternate_cluster=_t(node, "alternateCluster"),
        header_struct_name=_t(node, "headerStructName"),
        address_offset=parse_int(_req(node, "addressOffset")),
        default_register_properties=parse_register_properties(node),
        children=parse_register_cluster(node),
        derived_from=node.get("derivedFrom"),
    )
    return _maybe_array(node, info)


def parse_address_block(node: ET.Element) -> AddressBlock:
    usage = _enum(node, "usage", AddressBlockUsage)
    return AddressBlock(
        offset=parse_int(_req(node, "offset")),
        size=parse_int(_req(node, "size")),
        usage=AddressBlockUsage.Registers if usage is None else usage,
        protection=_enum(node, "protection", Protection),
    )


def parse_interrupt(node: ET.Element) -> Interrupt:
    return Interrupt(
        name=_req(node, "name"),
        description=_t(node, "description"),
        value=parse_int(_req(node, "value")),
    )


def _opt_tuple(nodes: list[ET.Element], parse: Callable[[ET.Element], T]) -> Optional[tuple[T, ...]]:
    return tuple(parse(n) for n in nodes) if nodes else None


def parse_peripheral(node: ET.Element):
    regs_node = node.find("registers")
    info = PeripheralInfo(
        name=_req(node, "name"),
        display_name=_t(node, "displayName"),
        version=_t(node, "version"),
        description=_t(node, "description"),
        alternate_peripheral=_t(node, "alternatePeripheral"),
        group_name=_t(node, "groupName"),
        prepend_to_name=_t(node, "prependToName"),
        append_to_name=_t(node, "appendToName"),
        header_struct_name=_t(node, "headerStructName"),
        base_address=parse_int(_req(node, "baseAddress")),
        default_register_properties=parse_register_properties(node),
        address_block=_opt_tuple(node.findall("addressBlock"), parse_address_block),
        interrupt=tuple(parse_interrupt(i) for i in node.findall("interrupt")),
        registers=None if regs_node is None else parse_register_cluster(regs_node),
        derived_from=node.get("derivedFrom"),  # attribute on peripheral element
    )
    return _maybe_array(node, info)


def parse_cpu(node: ET.Element) -> Cpu:
    endian = _enum(node, "endian", Endian)
    if endian is None:
        raise SvdParseError("<cpu> is missing required <endian>")
    return Cpu(
        name=_req(node, "name"),
        revision=_req(node, "revision"),
        endian=endian,
        mpu_present=bool(_bool(node, "mpuPresent")),
        fpu_present=bool(_bool(node, "fpuPresent")),
        fpu_double_precision=_bool(node, "fpuDP"),
        dsp_present=_bool(node, "dspPresent"),
        icache_present=_bool(node, "icachePresent"),
        dcache_present=_bool(node, "dcachePresent"),
        vtor_present=_bool(node, "vtorPresent"),
        nvic_priority_bits=parse_int(_req(node, "nvicPrioBits")),
        has_vendor_systick=bool(_bool(node, "vendorSystickConfig")),
        device_num_interrupts=_int(node, "deviceNumInterrupts"),
    )


def parse_device(root: ET.Element, default_name: str = "device") -> Device:
    dev_name = _t(root, "name") or default_name

    peripherals = []
    perips_node = root.find("peripherals")
    if perips_node is None:
        log.warning("No <peripherals> found in device %s", dev_name)
    else:
        for p in perips_node.findall("peripheral"):
            if not _t(p, "name"):
                log.warning("Skipping unnamed peripheral in device %s", dev_name)
                continue
            peripherals.append(parse_peripheral(p))

    cpu_node = root.find("cpu")
    return Device(
        name=dev_name,
        schema_version=root.get("schemaVersion", "1.1"),
        vendor=_t(root, "vendor"),
        vendor_id=_t(root, "vendorID"),
        series=_t(root, "series"),
        version=_t(root, "version"),
        description=_t(root, "description"),
        license_text=_t(root, "licenseText"),
        cpu=None if cpu_node is None else parse_cpu(cpu_node),
        header_system_filename=_t(root, "headerSystemFilename"),
        header_definitions_prefix=_t(root, "headerDefinitionsPrefix"),
        address_unit_bits=_int(root, "addressUnitBits"),
        width=_int(root, "width"),
        default_register_properties=parse_register_properties(root),
        peripherals=tuple(peripherals),
    )


def load_svd(path: Path) -> Device:
    try:
        tree = ET.parse(path)
    except ET.ParseError as e:
        raise SvdParseError(f"{path}: malformed XML: {e}") from e
    device = parse_device(tree.getroot(), default_name=path.stem)
    log.info("Loaded SVD device=%s peripherals=%d", device.name, len(device.peripherals))
    return device
