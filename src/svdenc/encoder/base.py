from __future__ import annotations

from functools import singledispatch
from typing import Any, Iterable

from svdenc.encoder.config import EncoderConfig
from svdenc.encoder.errors import UnsupportedEntityError
from svdenc.encoder.node import Node
from svdenc.svd.model import Array, Single


@singledispatch
def encode(entity: Any, config: EncoderConfig) -> Node:
    """Encode a model entity into a node.

    Implementations register themselves when their module is imported.
    Importing svdenc.encoder.peripheral pulls in every encoder module, so
    callers that dispatch directly through this function import it first.
    Failures of nested entities propagate to the caller untouched.
    """
    raise UnsupportedEntityError(
        f"no encoder for {type(entity).__name__} (is svdenc.encoder.peripheral imported?)"
    )


@encode.register(Single)
def _encode_single(entity: Single, config: EncoderConfig) -> Node:
    return encode(entity.info, config)


@encode.register(Array)
def _encode_array(entity: Array, config: EncoderConfig) -> Node:
    # dim fields first, the info overrides on top
    dim = encode(entity.dim, config)
    info = encode(entity.info, config)
    return Node(info.name).merge(dim).merge(info)


def encode_all(entities: Iterable[Any], config: EncoderConfig) -> list[Node]:
    return [encode(e, config) for e in entities]


def bool_text(value: bool) -> str:
    return "true" if value else "false"
