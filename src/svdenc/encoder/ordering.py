from __future__ import annotations

from typing import Callable, Optional, Sequence, TypeVar

from svdenc.encoder.config import EncoderConfig, RegistersOrClustersFirst, Sorting
from svdenc.encoder.errors import EncodeError
from svdenc.svd.model import Field, Peripheral, RegisterCluster, is_cluster, is_register

T = TypeVar("T")


def _sort(items: Sequence[T], sorting: Optional[Sorting],
          offset: Callable[[T], int], name: Callable[[T], str]) -> list[T]:
    # sorted() is stable; equal keys keep their source order
    if sorting is None:
        return list(items)
    if sorting is Sorting.Offset:
        return sorted(items, key=offset)
    if sorting is Sorting.OffsetReversed:
        return sorted(items, key=lambda i: -offset(i))
    if sorting is Sorting.Name:
        return sorted(items, key=name)
    raise EncodeError(f"unsupported sorting {sorting!r}")


def sort_register_cluster(items: Sequence[RegisterCluster], sorting: Optional[Sorting]) -> list[RegisterCluster]:
    return _sort(items, sorting, lambda rc: rc.address_offset, lambda rc: rc.name)


def order_register_cluster(items: Sequence[RegisterCluster], config: EncoderConfig) -> list[RegisterCluster]:
    """Apply the partition order and sort key to a register/cluster collection."""
    first = config.registers_or_clusters_first
    sorting = config.register_cluster_sorting

    if first is None:
        return sort_register_cluster(items, sorting)

    regs = sort_register_cluster([rc for rc in items if is_register(rc)], sorting)
    clusters = sort_register_cluster([rc for rc in items if is_cluster(rc)], sorting)
    if first is RegistersOrClustersFirst.Registers:
        return regs + clusters
    return clusters + regs


def order_fields(items: Sequence[Field], config: EncoderConfig) -> list[Field]:
    return _sort(items, config.field_sorting, lambda f: f.info.bit_offset, lambda f: f.name)


def order_peripherals(items: Sequence[Peripheral], config: EncoderConfig) -> list[Peripheral]:
    return _sort(items, config.peripheral_sorting, lambda p: p.info.base_address, lambda p: p.name)
