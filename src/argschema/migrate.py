"""Migrate a driver's argsConstraints into a manifest-recorded schema."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from argschema.config import ArgSchemaConfig
from argschema.errors import (
    ConstraintsNotFoundError,
    MainClassMissingError,
    ManifestError,
    SchemaExistsError,
)
from argschema.loader import inspect_driver, resolve_module
from argschema.manifest import load_nearest_manifest, write_manifest
from argschema.translator import translate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MigrationResult:
    """Outcome of a single driver migration."""

    module_path: Path
    manifest_path: Path
    main_class: str
    schema: dict[str, Any]
    written: bool


def migrate(
    driver: str,
    *,
    cwd: Path | None = None,
    config: ArgSchemaConfig | None = None,
    dry_run: bool = False,
) -> MigrationResult:
    """Derive the schema for ``driver`` and record it in its manifest.

    Raises:
        ModuleResolutionError: If ``driver`` does not resolve to a module
        ManifestError: If no manifest is found or it cannot be written
        MainClassMissingError: If the manifest names no main class
        SchemaExistsError: If the manifest already records a schema
        DriverLoadError: If the driver module fails to import
        ConstraintsNotFoundError: If the main class declares no constraints
    """
    cfg = config or ArgSchemaConfig()
    module_path = resolve_module(driver, cwd)
    logger.info(f"resolved {driver} to {module_path}")

    manifest = load_nearest_manifest(module_path, cfg.manifest_name)
    logger.debug(f"using manifest {manifest.path}")

    main_class = manifest.main_class(cfg.namespace, cfg.main_class_field)
    if main_class is None:
        raise MainClassMissingError(
            f"Could not find {cfg.namespace}.{cfg.main_class_field} in {manifest.path}"
        )

    if manifest.has_schema(cfg.namespace, cfg.schema_field):
        raise SchemaExistsError(f"{driver} already has a schema!")

    metadata = inspect_driver(module_path, main_class, cfg.constraints_attr)
    if metadata.constraints is None:
        raise ConstraintsNotFoundError(
            f"no {cfg.constraints_attr} found in driver {driver}, module {module_path} "
            f"and main class name {main_class}"
        )

    package_name = manifest.name
    if package_name is None:
        raise ManifestError(f"Manifest {manifest.path} has no 'name'")

    schema = translate(
        package_name,
        metadata.constraints,
        schema_uri=cfg.schema_uri,
        cli_dest_key=cfg.cli_dest_key,
        legacy_self_checks=cfg.legacy_self_checks,
    ).to_dict()

    if not dry_run:
        updated = manifest.with_schema(schema, cfg.namespace, cfg.schema_field)
        write_manifest(updated, indent=cfg.indent)

    return MigrationResult(
        module_path=module_path,
        manifest_path=manifest.path,
        main_class=main_class,
        schema=schema,
        written=not dry_run,
    )
