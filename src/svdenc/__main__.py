from __future__ import annotations

import argparse
import sys
from pathlib import Path

from svdenc.app import run_app


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="svdenc", description="Re-encode a CMSIS-SVD file under a formatting policy")
    p.add_argument("svd", type=Path, help="CMSIS-SVD XML file path")
    p.add_argument("-o", "--output", type=Path, default=None, help="Output file (default: stdout)")
    p.add_argument("--config", type=Path, default=None, help="YAML file with encoder options")
    p.add_argument("--peripheral", action="append", default=[], metavar="NAME",
                   help="Only encode this peripheral (repeatable); each becomes its own document")

    # Logging
    p.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    p.add_argument("--quiet", action="store_true", help="Reduce console output")

    args = p.parse_args(argv)

    return run_app(
        svd_path=args.svd,
        output=args.output,
        config_path=args.config,
        peripherals=args.peripheral,
        log_level=args.log_level,
        quiet=args.quiet,
    )


if __name__ == "__main__":
    sys.exit(main())
