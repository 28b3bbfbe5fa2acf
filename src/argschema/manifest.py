"""Read and write driver package manifests."""

from __future__ import annotations

import copy
import hashlib
import json
import logging
import os
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from argschema.errors import ManifestConflictError, ManifestError

logger = logging.getLogger(__name__)

DEFAULT_MANIFEST_NAME = "package.json"


def _fingerprint(content: bytes) -> str:
    return hashlib.sha256(content).hexdigest()


@dataclass(frozen=True)
class PackageManifest:
    """Parsed package manifest plus the fingerprint of the bytes it came from."""

    path: Path
    data: Mapping[str, Any]
    fingerprint: str

    @property
    def name(self) -> str | None:
        name = self.data.get("name")
        return name if isinstance(name, str) and name else None

    def section(self, namespace: str = "appium") -> Mapping[str, Any]:
        value = self.data.get(namespace)
        return value if isinstance(value, Mapping) else {}

    def main_class(self, namespace: str = "appium", field: str = "mainClass") -> str | None:
        value = self.section(namespace).get(field)
        return value if isinstance(value, str) and value else None

    def schema(self, namespace: str = "appium", field: str = "schema") -> Any:
        return self.section(namespace).get(field)

    def has_schema(self, namespace: str = "appium", field: str = "schema") -> bool:
        """Whether a schema is recorded. Empty objects and arrays count as recorded."""
        value = self.schema(namespace, field)
        if isinstance(value, (dict, list)):
            return True
        return bool(value)

    def with_schema(
        self,
        schema: Mapping[str, Any],
        namespace: str = "appium",
        field: str = "schema",
    ) -> "PackageManifest":
        """Return a copy with ``<namespace>.<field>`` set to ``schema``."""
        data = copy.deepcopy(dict(self.data))
        section = data.setdefault(namespace, {})
        if not isinstance(section, dict):
            raise ManifestError(f"Manifest '{namespace}' in {self.path} must be an object")
        section[field] = copy.deepcopy(dict(schema))
        return PackageManifest(path=self.path, data=data, fingerprint=self.fingerprint)


def find_manifest(start: Path, manifest_name: str = DEFAULT_MANIFEST_NAME) -> Path:
    """Locate the nearest manifest at or above ``start``."""
    start = start.resolve()
    directory = start if start.is_dir() else start.parent
    for candidate_dir in (directory, *directory.parents):
        candidate = candidate_dir / manifest_name
        if candidate.is_file():
            return candidate
    raise ManifestError(f"Could not find {manifest_name} at or above {start}")


def read_manifest(path: Path) -> PackageManifest:
    """Load a manifest JSON object, keeping key order."""
    try:
        with path.open("rb") as handle:
            content = handle.read()
    except OSError as exc:
        raise ManifestError(f"Failed to read manifest at {path}: {exc}") from exc

    try:
        raw = json.loads(content.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ManifestError(f"Failed to parse manifest at {path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise ManifestError(f"Manifest at {path} must be a JSON object")

    return PackageManifest(path=path.resolve(), data=raw, fingerprint=_fingerprint(content))


def load_nearest_manifest(
    start: Path, manifest_name: str = DEFAULT_MANIFEST_NAME
) -> PackageManifest:
    return read_manifest(find_manifest(start, manifest_name))


def serialize_manifest(data: Mapping[str, Any], indent: int = 2) -> str:
    return json.dumps(data, indent=indent, ensure_ascii=False) + "\n"


def write_manifest(manifest: PackageManifest, *, indent: int = 2) -> PackageManifest:
    """Atomically overwrite the manifest file with ``manifest.data``.

    Raises:
        ManifestConflictError: If the file on disk no longer matches the
            fingerprint recorded when the manifest was read.
    """
    path = manifest.path
    try:
        with path.open("rb") as handle:
            current = handle.read()
    except FileNotFoundError as exc:
        raise ManifestConflictError(f"Manifest {path} was removed since it was read") from exc
    except OSError as exc:
        raise ManifestError(f"Failed to read manifest at {path}: {exc}") from exc

    if _fingerprint(current) != manifest.fingerprint:
        raise ManifestConflictError(
            f"Manifest {path} was modified since it was read; refusing to overwrite"
        )

    payload = serialize_manifest(manifest.data, indent=indent).encode("utf-8")
    tmp_name: str | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="wb",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(payload)
            tmp.flush()
            os.fsync(tmp.fileno())
        shutil.copymode(path, tmp_name)
        os.replace(tmp_name, path)
        tmp_name = None
    except OSError as exc:
        raise ManifestError(f"Failed to write manifest at {path}: {exc}") from exc
    finally:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)

    logger.debug(f"Wrote {len(payload)} bytes to {path}")
    return PackageManifest(path=path, data=manifest.data, fingerprint=_fingerprint(payload))
