from __future__ import annotations

from typing import Sequence

from svdenc.encoder.base import encode, encode_all
from svdenc.encoder.config import EncoderConfig, format_number
from svdenc.encoder.enumerated_values import encode_enumerated_value  # noqa: F401 (registers)
from svdenc.encoder.node import Node, new_node
from svdenc.svd.model import DimArrayIndex, DimElement


def dim_index_text(index: Sequence[str]) -> str:
    """Render dimIndex, collapsing a consecutive run to `first-last`."""
    if len(index) > 1:
        if all(i.isdigit() for i in index):
            nums = [int(i) for i in index]
            canonical = all(str(n) == i for n, i in zip(nums, index))
            if canonical and nums == list(range(nums[0], nums[0] + len(nums))):
                return f"{nums[0]}-{nums[-1]}"
        elif all(len(i) == 1 and "A" <= i <= "Z" for i in index):
            codes = [ord(i) for i in index]
            if codes == list(range(codes[0], codes[0] + len(codes))):
                return f"{index[0]}-{index[-1]}"
    return ",".join(index)


@encode.register(DimArrayIndex)
def encode_dim_array_index(dai: DimArrayIndex, config: EncoderConfig) -> Node:
    elem = Node("dimArrayIndex")
    if dai.header_enum_name is not None:
        elem.children.append(new_node("headerEnumName", dai.header_enum_name))
    elem.children.extend(encode_all(dai.values, config))
    return elem


@encode.register(DimElement)
def encode_dim(dim: DimElement, config: EncoderConfig) -> Node:
    # wrapper only; array entities merge its children into their own node
    elem = Node("dimElement")
    elem.children.append(new_node("dim", format_number(dim.dim, config.dim_dim)))
    elem.children.append(new_node("dimIncrement", format_number(dim.dim_increment, config.dim_increment)))

    if dim.dim_index is not None:
        elem.children.append(new_node("dimIndex", dim_index_text(dim.dim_index)))

    if dim.dim_name is not None:
        elem.children.append(new_node("dimName", dim.dim_name))

    if dim.dim_array_index is not None:
        elem.children.append(encode(dim.dim_array_index, config))

    return elem
