from __future__ import annotations

import re
from dataclasses import dataclass, fields
from enum import Enum
from pathlib import Path
from typing import Any, Mapping, Optional, get_args, get_type_hints

import yaml

from svdenc.encoder.errors import EncodeError
from svdenc.utils.logger import get_logger

log = get_logger(__name__)


class ConfigError(ValueError):
    """Raised when an encoder configuration cannot be built."""
    pass


class CaseStyle(Enum):
    Upper = "upper"
    Lower = "lower"
    Camel = "camel"
    Pascal = "pascal"
    Snake = "snake"
    Constant = "constant"


class NumberFormat(Enum):
    Dec = "dec"
    UpperHex = "upper_hex"
    LowerHex = "lower_hex"
    UpperHex8 = "upper_hex8"
    LowerHex8 = "lower_hex8"
    UpperHex16 = "upper_hex16"
    LowerHex16 = "lower_hex16"
    Bin = "bin"


class Sorting(Enum):
    Offset = "offset"
    OffsetReversed = "offset_reversed"
    Name = "name"


class RegistersOrClustersFirst(Enum):
    Registers = "registers"
    Clusters = "clusters"


class BitRangeFormat(Enum):
    """Overrides the bit range notation recorded in the model."""
    BitRange = "bit_range"
    OffsetWidth = "offset_width"
    MsbLsb = "msb_lsb"


@dataclass(frozen=True)
class EncoderConfig:
    """Formatting policy for the encoders.

    Every option is optional. An unset case style passes names through,
    an unset number format renders decimal and an unset sorting keeps the
    source order.
    """
    peripheral_name: Optional[CaseStyle] = None
    peripheral_base_address: Optional[NumberFormat] = None
    peripheral_sorting: Optional[Sorting] = None

    address_block_offset: Optional[NumberFormat] = None
    address_block_size: Optional[NumberFormat] = None

    interrupt_name: Optional[CaseStyle] = None

    cluster_name: Optional[CaseStyle] = None
    cluster_address_offset: Optional[NumberFormat] = None

    register_cluster_sorting: Optional[Sorting] = None
    registers_or_clusters_first: Optional[RegistersOrClustersFirst] = None

    register_name: Optional[CaseStyle] = None
    register_address_offset: Optional[NumberFormat] = None
    register_size: Optional[NumberFormat] = None
    register_reset_value: Optional[NumberFormat] = None
    register_reset_mask: Optional[NumberFormat] = None

    field_name: Optional[CaseStyle] = None
    field_bit_range: Optional[BitRangeFormat] = None
    field_sorting: Optional[Sorting] = None

    enumerated_values_name: Optional[CaseStyle] = None
    enumerated_value_name: Optional[CaseStyle] = None
    enumerated_value_value: Optional[NumberFormat] = None

    dim_dim: Optional[NumberFormat] = None
    dim_increment: Optional[NumberFormat] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> EncoderConfig:
        """Build a config from option names mapped to enum value strings."""
        known = {f.name for f in fields(cls)}
        hints = get_type_hints(cls)
        kwargs: dict[str, Any] = {}
        for key, raw in data.items():
            if key not in known:
                raise ConfigError(f"unknown option '{key}'")
            if raw is None:
                continue
            # Optional[X] -> X
            enum_cls = get_args(hints[key])[0]
            try:
                kwargs[key] = enum_cls(str(raw).lower())
            except ValueError:
                choices = ", ".join(m.value for m in enum_cls)
                raise ConfigError(f"option '{key}': invalid value '{raw}' (expected one of: {choices})") from None
        return cls(**kwargs)


def load_config(path: Path) -> EncoderConfig:
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"{path}: malformed YAML: {e}") from e
    if data is None:
        return EncoderConfig()
    if not isinstance(data, Mapping):
        raise ConfigError(f"{path}: expected a mapping of options, got {type(data).__name__}")
    cfg = EncoderConfig.from_dict(data)
    log.info("Loaded encoder config %s (%d options)", path, len(data))
    return cfg


# ---- case conversion

# stand-ins for the array placeholders, which must survive unchanged
_PLACEHOLDERS = (("[%s]", "\x01"), ("%s", "\x00"))
_DELIMITERS = re.compile(r"[_\-\s]+")
_BOUNDARY = re.compile(r"(?<=[a-z0-9\x00\x01])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def _split_words(name: str) -> list[str]:
    words: list[str] = []
    for chunk in _DELIMITERS.split(name):
        words.extend(w for w in _BOUNDARY.split(chunk) if w)
    return words


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:].lower()


def _join_cased(words: list[str]) -> str:
    # a one-letter word gives no case boundary to its successor ("PortA_B", not "PortAB")
    out = ""
    for i, w in enumerate(words):
        if i and len(words[i - 1]) == 1 and words[i - 1].isalpha():
            out += "_"
        out += w
    return out


def change_case(name: str, style: Optional[CaseStyle]) -> str:
    if style is None:
        return name

    s = name
    for placeholder, token in _PLACEHOLDERS:
        s = s.replace(placeholder, token)

    if style is CaseStyle.Upper:
        out = s.upper()
    elif style is CaseStyle.Lower:
        out = s.lower()
    else:
        words = _split_words(s)
        if style is CaseStyle.Snake:
            out = "_".join(w.lower() for w in words)
        elif style is CaseStyle.Constant:
            out = "_".join(w.upper() for w in words)
        elif style is CaseStyle.Pascal:
            out = _join_cased([_capitalize(w) for w in words])
        elif style is CaseStyle.Camel:
            out = _join_cased([w.lower() for w in words[:1]] + [_capitalize(w) for w in words[1:]])
        else:
            raise ConfigError(f"unsupported case style {style!r}")

    for placeholder, token in _PLACEHOLDERS:
        out = out.replace(token, placeholder)
    return out


# ---- numbers

def format_number(value: int, style: Optional[NumberFormat]) -> str:
    if value < 0:
        raise EncodeError(f"cannot format negative value {value}")

    if style is None or style is NumberFormat.Dec:
        return str(value)
    if style is NumberFormat.UpperHex:
        return f"0x{value:X}"
    if style is NumberFormat.LowerHex:
        return f"0x{value:x}"
    if style is NumberFormat.UpperHex8:
        return f"0x{value:08X}"
    if style is NumberFormat.LowerHex8:
        return f"0x{value:08x}"
    if style is NumberFormat.UpperHex16:
        return f"0x{value:016X}"
    if style is NumberFormat.LowerHex16:
        return f"0x{value:016x}"
    if style is NumberFormat.Bin:
        return f"0b{value:b}"
    raise ConfigError(f"unsupported number format {style!r}")


def parse_number(text: str, style: Optional[NumberFormat]) -> int:
    """Inverse of format_number for the same style."""
    if style is None or style is NumberFormat.Dec:
        return int(text, 10)
    if style is NumberFormat.Bin:
        if not text.startswith("0b"):
            raise ValueError(f"not a binary literal: {text!r}")
        return int(text[2:], 2)
    if not text.lower().startswith("0x"):
        raise ValueError(f"not a hex literal: {text!r}")
    return int(text[2:], 16)
