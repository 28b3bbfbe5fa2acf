"""Core types for argument constraints and driver schemas."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any, Mapping, Sequence


JsonSchema = Mapping[str, Any]

DEFAULT_SCHEMA_URI = "http://json-schema.org/draft-07/schema"


def _field(raw: Any, key: str) -> Any:
    if isinstance(raw, Mapping):
        return raw.get(key)
    return getattr(raw, key, None)


def _inclusion(value: Any) -> tuple[Any, ...] | None:
    if isinstance(value, Mapping):
        value = value.get("within")
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        return tuple(value)
    return None


@dataclass(frozen=True)
class ConstraintDescriptor:
    """Declared type, allowed values and requiredness of one driver argument."""

    is_string: bool = False
    is_boolean: bool = False
    is_number: bool = False
    is_array: bool = False
    is_object: bool = False
    inclusion: tuple[Any, ...] | None = None
    presence: bool = False

    @classmethod
    def from_value(cls, raw: Any) -> "ConstraintDescriptor":
        """Create a descriptor from a constraints entry.

        Entries may be mappings or plain objects using the camelCase keys
        ``isString``, ``isBoolean``, ``isNumber``, ``isArray``, ``isObject``,
        ``inclusion`` and ``presence``. Unknown keys are ignored and any
        truthy flag counts as set.
        """
        if raw is None:
            return cls()
        return cls(
            is_string=bool(_field(raw, "isString")),
            is_boolean=bool(_field(raw, "isBoolean")),
            is_number=bool(_field(raw, "isNumber")),
            is_array=bool(_field(raw, "isArray")),
            is_object=bool(_field(raw, "isObject")),
            inclusion=_inclusion(_field(raw, "inclusion")),
            presence=bool(_field(raw, "presence")),
        )


@dataclass(frozen=True)
class DriverSchema:
    """JSON Schema document describing a driver's configuration."""

    title: str
    description: str
    properties: Mapping[str, JsonSchema]
    required: tuple[str, ...] = ()
    schema_uri: str = DEFAULT_SCHEMA_URI

    @classmethod
    def for_package(
        cls,
        package_name: str,
        properties: Mapping[str, JsonSchema],
        required: Sequence[str] = (),
        *,
        schema_uri: str = DEFAULT_SCHEMA_URI,
    ) -> "DriverSchema":
        return cls(
            title=f"{package_name} Driver Configuration",
            description=f"Appium configuration schema for the {package_name} driver.",
            properties=copy.deepcopy(dict(properties)),
            required=tuple(required),
            schema_uri=schema_uri,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a fresh JSON-compatible dict.

        ``required`` is omitted when no argument is required.
        """
        data: dict[str, Any] = {
            "$schema": self.schema_uri,
            "type": "object",
            "properties": copy.deepcopy(dict(self.properties)),
            "additionalProperties": False,
            "title": self.title,
            "description": self.description,
        }
        if self.required:
            data["required"] = list(self.required)
        return data
