from __future__ import annotations

from svdenc.encoder.base import bool_text, encode, encode_all
from svdenc.encoder.config import EncoderConfig, change_case, format_number
from svdenc.encoder.node import Node, new_node
from svdenc.encoder.ordering import order_peripherals
from svdenc.encoder.properties import register_properties_nodes
from svdenc.encoder.register import encode_register_cluster
from svdenc.svd.model import Cpu, Device, Peripheral, PeripheralInfo
from svdenc.utils.logger import get_logger

log = get_logger(__name__)

SCHEMA_ATTRIBUTES = {
    "xmlns:xs": "http://www.w3.org/2001/XMLSchema-instance",
    "xs:noNamespaceSchemaLocation": "CMSIS-SVD.xsd",
}


@encode.register(PeripheralInfo)
def _encode_peripheral_info(info: PeripheralInfo, config: EncoderConfig) -> Node:
    log.debug("encoding peripheral %s", info.name)
    elem = Node("peripheral")
    elem.children.append(new_node("name", change_case(info.name, config.peripheral_name)))

    if info.display_name is not None:
        elem.children.append(new_node("displayName", info.display_name))

    if info.version is not None:
        elem.children.append(new_node("version", info.version))

    if info.description is not None:
        elem.children.append(new_node("description", info.description))

    if info.alternate_peripheral is not None:
        elem.children.append(new_node("alternatePeripheral", change_case(info.alternate_peripheral, config.peripheral_name)))

    if info.group_name is not None:
        elem.children.append(new_node("groupName", info.group_name))

    if info.prepend_to_name is not None:
        elem.children.append(new_node("prependToName", change_case(info.prepend_to_name, config.peripheral_name)))

    if info.append_to_name is not None:
        elem.children.append(new_node("appendToName", change_case(info.append_to_name, config.peripheral_name)))

    if info.header_struct_name is not None:
        elem.children.append(new_node("headerStructName", change_case(info.header_struct_name, config.peripheral_name)))

    elem.children.append(new_node("baseAddress", format_number(info.base_address, config.peripheral_base_address)))

    elem.children.extend(register_properties_nodes(info.default_register_properties, config))

    if info.address_block is not None:
        elem.children.extend(encode_all(info.address_block, config))

    # source order, never sorted
    elem.children.extend(encode_all(info.interrupt, config))

    if info.registers is not None:
        regs = Node("registers")
        regs.children = encode_register_cluster(info.registers, config)
        elem.children.append(regs)

    # the schema expresses derivation as an attribute
    if info.derived_from is not None:
        elem.attributes["derivedFrom"] = change_case(info.derived_from, config.peripheral_name)

    return elem


def encode_peripheral(peripheral: Peripheral, config: EncoderConfig) -> Node:
    return encode(peripheral, config)


@encode.register(Cpu)
def encode_cpu(cpu: Cpu, config: EncoderConfig) -> Node:
    elem = Node("cpu")
    elem.children.append(new_node("name", cpu.name))
    elem.children.append(new_node("revision", cpu.revision))
    elem.children.append(new_node("endian", cpu.endian.to_str()))
    elem.children.append(new_node("mpuPresent", bool_text(cpu.mpu_present)))
    elem.children.append(new_node("fpuPresent", bool_text(cpu.fpu_present)))

    optional_flags = (
        ("fpuDP", cpu.fpu_double_precision),
        ("dspPresent", cpu.dsp_present),
        ("icachePresent", cpu.icache_present),
        ("dcachePresent", cpu.dcache_present),
        ("vtorPresent", cpu.vtor_present),
    )
    for tag, flag in optional_flags:
        if flag is not None:
            elem.children.append(new_node(tag, bool_text(flag)))

    elem.children.append(new_node("nvicPrioBits", str(cpu.nvic_priority_bits)))
    elem.children.append(new_node("vendorSystickConfig", bool_text(cpu.has_vendor_systick)))

    if cpu.device_num_interrupts is not None:
        elem.children.append(new_node("deviceNumInterrupts", str(cpu.device_num_interrupts)))

    return elem


@encode.register(Device)
def encode_device(device: Device, config: EncoderConfig) -> Node:
    log.debug("encoding device %s (%d peripherals)", device.name, len(device.peripherals))
    elem = Node("device")
    elem.attributes["schemaVersion"] = device.schema_version
    elem.attributes.update(SCHEMA_ATTRIBUTES)

    for tag, text in (
        ("vendor", device.vendor),
        ("vendorID", device.vendor_id),
    ):
        if text is not None:
            elem.children.append(new_node(tag, text))

    elem.children.append(new_node("name", device.name))

    for tag, text in (
        ("series", device.series),
        ("version", device.version),
        ("description", device.description),
        ("licenseText", device.license_text),
    ):
        if text is not None:
            elem.children.append(new_node(tag, text))

    if device.cpu is not None:
        elem.children.append(encode(device.cpu, config))

    if device.header_system_filename is not None:
        elem.children.append(new_node("headerSystemFilename", device.header_system_filename))

    if device.header_definitions_prefix is not None:
        elem.children.append(new_node("headerDefinitionsPrefix", device.header_definitions_prefix))

    if device.address_unit_bits is not None:
        elem.children.append(new_node("addressUnitBits", str(device.address_unit_bits)))

    if device.width is not None:
        elem.children.append(new_node("width", str(device.width)))

    elem.children.extend(register_properties_nodes(device.default_register_properties, config))

    periphs = Node("peripherals")
    periphs.children = encode_all(order_peripherals(device.peripherals, config), config)
    elem.children.append(periphs)

    return elem
