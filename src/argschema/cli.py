"""Command-line entry point: convert a driver's argsConstraints to a schema.

Usage:
    argschema <path-to-driver>
    argschema --dry-run <path-to-driver>
    argschema --config argschema.yaml <path-to-driver>

Exit Codes:
    0 - Schema derived (and written unless --dry-run)
    1 - Missing argument or any migration failure
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from collections.abc import Sequence

from argschema.config import CONFIG_ENV_VAR, load_config
from argschema.errors import ArgSchemaError
from argschema.migrate import migrate

logger = logging.getLogger(__name__)

USAGE = "usage:\n\nargschema <path-to-driver-dir>"


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="argschema",
        description="Convert a driver's argsConstraints into a JSON Schema in its package.json",
    )
    parser.add_argument(
        "driver",
        nargs="?",
        default="",
        help="Path to the driver module, package directory or module name",
    )
    parser.add_argument(
        "--config",
        default=os.getenv(CONFIG_ENV_VAR),
        help=f"Path to YAML config file (default: ${CONFIG_ENV_VAR})",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the derived schema without writing the manifest",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    if not args.driver:
        logger.error(USAGE)
        return 1

    try:
        config = load_config(args.config)
        result = migrate(args.driver, config=config, dry_run=args.dry_run)
    except ArgSchemaError as exc:
        logger.error(str(exc))
        return 1

    rendered = json.dumps(result.schema, indent=config.indent, ensure_ascii=False)
    if result.written:
        logger.info(
            f"wrote the following schema to {result.manifest_path}:\n\n{rendered}\n"
            f"IMPORTANT: Don't forget to remove {config.constraints_attr} "
            f"from {result.main_class}!"
        )
    else:
        logger.info(
            f"dry run, {result.manifest_path} left unchanged. Derived schema:\n\n{rendered}"
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
