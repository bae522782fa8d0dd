from __future__ import annotations

from svdenc.encoder.base import encode
from svdenc.encoder.config import EncoderConfig, change_case, format_number
from svdenc.encoder.node import Node, new_node
from svdenc.svd.model import AddressBlock, Interrupt, RegisterProperties


def register_properties_nodes(props: RegisterProperties, config: EncoderConfig) -> list[Node]:
    """The registerPropertiesGroup, flattened into the owner's children."""
    out: list[Node] = []

    if props.size is not None:
        out.append(new_node("size", format_number(props.size, config.register_size)))

    if props.access is not None:
        out.append(new_node("access", props.access.to_str()))

    if props.protection is not None:
        out.append(new_node("protection", props.protection.to_str()))

    if props.reset_value is not None:
        out.append(new_node("resetValue", format_number(props.reset_value, config.register_reset_value)))

    if props.reset_mask is not None:
        out.append(new_node("resetMask", format_number(props.reset_mask, config.register_reset_mask)))

    return out


@encode.register(AddressBlock)
def encode_address_block(ab: AddressBlock, config: EncoderConfig) -> Node:
    elem = Node("addressBlock")
    elem.children.append(new_node("offset", format_number(ab.offset, config.address_block_offset)))
    elem.children.append(new_node("size", format_number(ab.size, config.address_block_size)))
    elem.children.append(new_node("usage", ab.usage.to_str()))
    if ab.protection is not None:
        elem.children.append(new_node("protection", ab.protection.to_str()))
    return elem


@encode.register(Interrupt)
def encode_interrupt(irq: Interrupt, config: EncoderConfig) -> Node:
    elem = Node("interrupt")
    elem.children.append(new_node("name", change_case(irq.name, config.interrupt_name)))
    if irq.description is not None:
        elem.children.append(new_node("description", irq.description))
    # interrupt numbers are always decimal in the schema
    elem.children.append(new_node("value", format_number(irq.value, None)))
    return elem
