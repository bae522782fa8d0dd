from __future__ import annotations

from svdenc.encoder import dim  # noqa: F401 (registers DimElement for field arrays)
from svdenc.encoder.base import bool_text, encode, encode_all
from svdenc.encoder.config import BitRangeFormat, EncoderConfig, change_case
from svdenc.encoder.enumerated_values import encode_enumerated_values  # noqa: F401
from svdenc.encoder.errors import EncodeError
from svdenc.encoder.node import Node, new_node
from svdenc.svd.enums import BitRangeType
from svdenc.svd.model import (
    BitRange,
    FieldInfo,
    UseEnumeratedValues,
    WriteAsRead,
    WriteConstraint,
    WriteConstraintRange,
)

_RANGE_FORMATS = {
    BitRangeType.BitRange: BitRangeFormat.BitRange,
    BitRangeType.OffsetWidth: BitRangeFormat.OffsetWidth,
    BitRangeType.MsbLsb: BitRangeFormat.MsbLsb,
}


def bit_range_nodes(br: BitRange, config: EncoderConfig) -> list[Node]:
    fmt = config.field_bit_range or _RANGE_FORMATS[br.range_type]
    if fmt is BitRangeFormat.OffsetWidth:
        return [new_node("bitOffset", str(br.offset)), new_node("bitWidth", str(br.width))]
    if fmt is BitRangeFormat.MsbLsb:
        return [new_node("lsb", str(br.lsb)), new_node("msb", str(br.msb))]
    if fmt is BitRangeFormat.BitRange:
        return [new_node("bitRange", f"[{br.msb}:{br.lsb}]")]
    raise EncodeError(f"unsupported bit range format {fmt!r}")


def encode_write_constraint(wc: WriteConstraint, config: EncoderConfig) -> Node:
    elem = Node("writeConstraint")
    if isinstance(wc, WriteAsRead):
        elem.children.append(new_node("writeAsRead", bool_text(wc.value)))
    elif isinstance(wc, UseEnumeratedValues):
        elem.children.append(new_node("useEnumeratedValues", bool_text(wc.value)))
    elif isinstance(wc, WriteConstraintRange):
        rng = Node("range")
        rng.children.append(new_node("minimum", str(wc.min)))
        rng.children.append(new_node("maximum", str(wc.max)))
        elem.children.append(rng)
    else:
        raise EncodeError(f"unsupported write constraint {type(wc).__name__}")
    return elem


@encode.register(FieldInfo)
def encode_field(info: FieldInfo, config: EncoderConfig) -> Node:
    elem = Node("field")
    elem.children.append(new_node("name", change_case(info.name, config.field_name)))

    if info.description is not None:
        elem.children.append(new_node("description", info.description))

    elem.children.extend(bit_range_nodes(info.bit_range, config))

    if info.access is not None:
        elem.children.append(new_node("access", info.access.to_str()))

    if info.modified_write_values is not None:
        elem.children.append(new_node("modifiedWriteValues", info.modified_write_values.to_str()))

    if info.write_constraint is not None:
        elem.children.append(encode_write_constraint(info.write_constraint, config))

    if info.read_action is not None:
        elem.children.append(new_node("readAction", info.read_action.to_str()))

    elem.children.extend(encode_all(info.enumerated_values, config))

    if info.derived_from is not None:
        elem.attributes["derivedFrom"] = change_case(info.derived_from, config.field_name)

    return elem
