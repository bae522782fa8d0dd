from __future__ import annotations

from typing import Sequence

from svdenc.encoder.base import encode
from svdenc.encoder.config import EncoderConfig, change_case, format_number
from svdenc.encoder.field import encode_write_constraint
from svdenc.encoder.node import Node, new_node
from svdenc.encoder.ordering import order_fields, order_register_cluster
from svdenc.encoder.properties import register_properties_nodes
from svdenc.svd.model import ClusterInfo, RegisterCluster, RegisterInfo
from svdenc.utils.logger import get_logger

log = get_logger(__name__)


def encode_register_cluster(items: Sequence[RegisterCluster], config: EncoderConfig) -> list[Node]:
    """Encode a register/cluster collection in the configured sibling order."""
    return [encode(rc, config) for rc in order_register_cluster(items, config)]


@encode.register(RegisterInfo)
def encode_register(info: RegisterInfo, config: EncoderConfig) -> Node:
    log.debug("encoding register %s", info.name)
    elem = Node("register")
    elem.children.append(new_node("name", change_case(info.name, config.register_name)))

    if info.display_name is not None:
        elem.children.append(new_node("displayName", info.display_name))

    if info.description is not None:
        elem.children.append(new_node("description", info.description))

    if info.alternate_group is not None:
        elem.children.append(new_node("alternateGroup", info.alternate_group))

    if info.alternate_register is not None:
        elem.children.append(new_node("alternateRegister", change_case(info.alternate_register, config.register_name)))

    elem.children.append(new_node("addressOffset", format_number(info.address_offset, config.register_address_offset)))

    elem.children.extend(register_properties_nodes(info.properties, config))

    if info.data_type is not None:
        elem.children.append(new_node("dataType", info.data_type.to_str()))

    if info.modified_write_values is not None:
        elem.children.append(new_node("modifiedWriteValues", info.modified_write_values.to_str()))

    if info.write_constraint is not None:
        elem.children.append(encode_write_constraint(info.write_constraint, config))

    if info.read_action is not None:
        elem.children.append(new_node("readAction", info.read_action.to_str()))

    if info.fields is not None:
        fields = Node("fields")
        fields.children = [encode(f, config) for f in order_fields(info.fields, config)]
        elem.children.append(fields)

    if info.derived_from is not None:
        elem.attributes["derivedFrom"] = change_case(info.derived_from, config.register_name)

    return elem


@encode.register(ClusterInfo)
def encode_cluster(info: ClusterInfo, config: EncoderConfig) -> Node:
    log.debug("encoding cluster %s", info.name)
    elem = Node("cluster")
    elem.children.append(new_node("name", change_case(info.name, config.cluster_name)))

    if info.description is not None:
        elem.children.append(new_node("description", info.description))

    if info.alternate_cluster is not None:
        elem.children.append(new_node("alternateCluster", change_case(info.alternate_cluster, config.cluster_name)))

    if info.header_struct_name is not None:
        elem.children.append(new_node("headerStructName", change_case(info.header_struct_name, config.cluster_name)))

    elem.children.append(new_node("addressOffset", format_number(info.address_offset, config.cluster_address_offset)))

    elem.children.extend(register_properties_nodes(info.default_register_properties, config))

    elem.children.extend(encode_register_cluster(info.children, config))

    if info.derived_from is not None:
        elem.attributes["derivedFrom"] = change_case(info.derived_from, config.cluster_name)

    return elem
