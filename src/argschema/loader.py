"""Loader utilities for driver modules and their argument constraints."""

from __future__ import annotations

import importlib.util
import json
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from types import ModuleType
from typing import Any, Mapping

from argschema.errors import DriverLoadError, ModuleResolutionError

logger = logging.getLogger(__name__)

DEFAULT_CONSTRAINTS_ATTR = "argsConstraints"
_SNAKE_CONSTRAINTS_ATTR = "args_constraints"


class _PathInserter:
    """Temporarily insert a path to sys.path for module imports."""

    def __init__(self, path: Path) -> None:
        self._path = str(path)
        self._inserted = False

    def __enter__(self) -> None:
        if self._path not in sys.path:
            sys.path.insert(0, self._path)
            self._inserted = True

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._inserted and self._path in sys.path:
            sys.path.remove(self._path)
        self._inserted = False


@dataclass(frozen=True)
class DriverMetadata:
    """What a driver main class declares about its CLI arguments.

    Any object can act as a metadata provider; the only contract is an
    optional ``argsConstraints`` mapping of argument name to descriptor.
    """

    main_class: str
    provider: Any
    constraints: Mapping[str, Any] | None


def _file_candidate(path: Path) -> Path | None:
    if path.is_file():
        return path.resolve()
    if not path.name:
        return None
    with_suffix = path.with_name(path.name + ".py")
    if with_suffix.is_file():
        return with_suffix.resolve()
    return None


def _package_main(directory: Path) -> Path | None:
    package_json = directory / "package.json"
    if not package_json.is_file():
        return None
    try:
        with package_json.open(encoding="utf-8") as handle:
            data = json.load(handle)
    except (OSError, ValueError):
        logger.debug(f"Ignoring unreadable {package_json} during resolution")
        return None
    main = data.get("main") if isinstance(data, dict) else None
    if not isinstance(main, str) or not main:
        return None
    return _file_candidate(directory / main)


def _find_importable(specifier: str, cwd: Path) -> Path | None:
    with _PathInserter(cwd):
        try:
            spec = importlib.util.find_spec(specifier)
        except (ImportError, ValueError):
            return None
    if spec is None or not spec.origin or not spec.has_location:
        return None
    return Path(spec.origin).resolve()


def resolve_module(specifier: str, cwd: Path | None = None) -> Path:
    """Resolve a driver path or module name to an absolute module file.

    Resolution order:
    - an existing file, or the same path with a ``.py`` suffix
    - a directory: its ``package.json`` ``main`` entry, else ``__init__.py``
    - an importable dotted module name, searched with ``cwd`` on sys.path
    """
    if not specifier:
        raise ModuleResolutionError("Driver path must be a non-empty string")

    base = (cwd or Path.cwd()).resolve()
    candidate = Path(specifier).expanduser()
    if not candidate.is_absolute():
        candidate = base / candidate

    resolved = _file_candidate(candidate)
    if resolved is None and candidate.is_dir():
        resolved = _package_main(candidate)
        if resolved is None and (candidate / "__init__.py").is_file():
            resolved = (candidate / "__init__.py").resolve()
    if resolved is None and "/" not in specifier and "\\" not in specifier:
        resolved = _find_importable(specifier, base)
    if resolved is None:
        raise ModuleResolutionError(f"Cannot resolve driver '{specifier}' from {base}")
    return resolved


def load_module(module_path: Path) -> ModuleType:
    """Import a module file under a unique name.

    Package ``__init__.py`` files are loaded as packages so relative imports
    inside the driver keep working.
    """
    is_package = module_path.name == "__init__.py"
    stem = module_path.parent.name if is_package else module_path.stem
    module_name = f"argschema_driver_{stem}_{abs(hash(str(module_path)))}"
    spec = importlib.util.spec_from_file_location(
        module_name,
        module_path,
        submodule_search_locations=[str(module_path.parent)] if is_package else None,
    )
    if spec is None or spec.loader is None:
        raise DriverLoadError(f"Unable to load module from {module_path}")

    module = importlib.util.module_from_spec(spec)
    search_root = module_path.parent.parent if is_package else module_path.parent
    sys.modules[module_name] = module
    try:
        with _PathInserter(search_root):
            spec.loader.exec_module(module)  # type: ignore[call-arg]
    except Exception as exc:
        sys.modules.pop(module_name, None)
        raise DriverLoadError(f"Failed to import driver module {module_path}: {exc}") from exc
    return module


def driver_class(module: ModuleType, main_class: str) -> Any:
    """Pick the main class export, falling back to ``default`` then the module."""
    provider = getattr(module, main_class, None)
    if provider is None:
        provider = getattr(module, "default", None)
    if provider is None:
        logger.debug(f"Module {module.__name__} has no '{main_class}'; using the module")
        provider = module
    return provider


def constraints_from(
    provider: Any, attr: str = DEFAULT_CONSTRAINTS_ATTR
) -> Mapping[str, Any] | None:
    """Read the argument constraints mapping off a metadata provider.

    Returns None when the provider declares no constraints at all.
    """
    value = getattr(provider, attr, None)
    if value is None and attr == DEFAULT_CONSTRAINTS_ATTR:
        value = getattr(provider, _SNAKE_CONSTRAINTS_ATTR, None)
    if value is None:
        return None
    if not isinstance(value, Mapping):
        raise DriverLoadError(
            f"'{attr}' on {provider!r} must be a mapping, got {type(value).__name__}"
        )
    bad_keys = [key for key in value if not isinstance(key, str)]
    if bad_keys:
        raise DriverLoadError(
            f"'{attr}' on {provider!r} must use string argument names, got {bad_keys[0]!r}"
        )
    return dict(value)


def inspect_driver(
    module_path: Path, main_class: str, attr: str = DEFAULT_CONSTRAINTS_ATTR
) -> DriverMetadata:
    module = load_module(module_path)
    provider = driver_class(module, main_class)
    return DriverMetadata(
        main_class=main_class,
        provider=provider,
        constraints=constraints_from(provider, attr),
    )
