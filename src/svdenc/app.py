from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional, Sequence

from svdenc.encoder.config import ConfigError, EncoderConfig, load_config
from svdenc.encoder.errors import EncodeError
from svdenc.encoder.node import Node, to_string
from svdenc.encoder.peripheral import encode_device, encode_peripheral
from svdenc.svd.model import Device
from svdenc.svd.svd_loader import SvdParseError, load_svd
from svdenc.utils.logger import get_logger, setup_logging

log = get_logger(__name__)


def select_peripherals(device: Device, names: Sequence[str]) -> list:
    by_name = {p.name.upper(): p for p in device.peripherals}
    selected = []
    for n in names:
        p = by_name.get(n.upper())
        if p is None:
            raise KeyError(f"peripheral not found: {n}")
        selected.append(p)
    return selected


def encode_svd(device: Device, config: EncoderConfig, peripherals: Sequence[str] = ()) -> Node:
    """Encode the whole device, or only the named peripherals.

    A single selected peripheral becomes the document root. Several are
    wrapped in one <peripherals> element so the output stays one document.
    """
    if not peripherals:
        return encode_device(device, config)
    nodes = [encode_peripheral(p, config) for p in select_peripherals(device, peripherals)]
    if len(nodes) == 1:
        return nodes[0]
    return Node("peripherals", children=nodes)


def run_app(
    svd_path: Path,
    output: Optional[Path],
    config_path: Optional[Path],
    peripherals: Sequence[str],
    log_level: str,
    quiet: bool,
) -> int:
    setup_logging(level=log_level, quiet=quiet)

    log.info("SVD: %s", svd_path)

    try:
        config = load_config(config_path) if config_path else EncoderConfig()
        device = load_svd(svd_path)
        root = encode_svd(device, config, peripherals)
    except (ConfigError, SvdParseError, EncodeError, KeyError, OSError) as e:
        log.error("%s", e)
        return 1

    text = to_string(root)
    if output is None:
        sys.stdout.write(text)
    else:
        output.write_text(text, encoding="utf-8")
        log.info("Wrote %s (<%s>)", output, root.name)
    return 0
