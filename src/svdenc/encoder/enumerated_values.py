from __future__ import annotations

from svdenc.encoder.base import bool_text, encode, encode_all
from svdenc.encoder.config import EncoderConfig, change_case, format_number
from svdenc.encoder.node import Node, new_node
from svdenc.svd.model import EnumeratedValue, EnumeratedValues


@encode.register(EnumeratedValue)
def encode_enumerated_value(ev: EnumeratedValue, config: EncoderConfig) -> Node:
    elem = Node("enumeratedValue")
    elem.children.append(new_node("name", change_case(ev.name, config.enumerated_value_name)))

    if ev.description is not None:
        elem.children.append(new_node("description", ev.description))

    if ev.value is not None:
        elem.children.append(new_node("value", format_number(ev.value, config.enumerated_value_value)))

    if ev.is_default is not None:
        elem.children.append(new_node("isDefault", bool_text(ev.is_default)))

    return elem


@encode.register(EnumeratedValues)
def encode_enumerated_values(evs: EnumeratedValues, config: EncoderConfig) -> Node:
    elem = Node("enumeratedValues")

    if evs.name is not None:
        elem.children.append(new_node("name", change_case(evs.name, config.enumerated_values_name)))

    if evs.header_enum_name is not None:
        elem.children.append(new_node("headerEnumName", evs.header_enum_name))

    if evs.usage is not None:
        elem.children.append(new_node("usage", evs.usage.to_str()))

    elem.children.extend(encode_all(evs.values, config))

    if evs.derived_from is not None:
        elem.attributes["derivedFrom"] = change_case(evs.derived_from, config.enumerated_values_name)

    return elem
