"""Translate driver argument constraints into a JSON Schema."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from argschema.naming import camel_case, kebab_case
from argschema.types import DEFAULT_SCHEMA_URI, ConstraintDescriptor, DriverSchema

logger = logging.getLogger(__name__)

DEFAULT_CLI_DEST_KEY = "appiumCliDest"


def build_property(
    arg_name: str,
    descriptor: ConstraintDescriptor,
    *,
    cli_dest_key: str = DEFAULT_CLI_DEST_KEY,
    legacy_self_checks: bool = False,
) -> dict[str, Any]:
    """Build the schema property for a single argument.

    With ``legacy_self_checks`` the array, object, inclusion and presence
    flags are read off the property being built instead of the descriptor,
    so they never apply. Only the primary type tags survive in that mode.
    """
    prop: dict[str, Any] = {}
    if descriptor.is_string:
        prop["type"] = "string"
    elif descriptor.is_boolean:
        prop["type"] = "boolean"
    elif descriptor.is_number:
        prop["type"] = "integer"

    if not legacy_self_checks:
        if descriptor.is_array:
            prop["type"] = "array"
            prop["items"] = {"type": "string"}
        if descriptor.is_object:
            prop["type"] = "object"
            prop["allowAdditionalProperties"] = True
        if descriptor.inclusion is not None:
            prop["enum"] = list(descriptor.inclusion)

    if camel_case(arg_name) != kebab_case(arg_name):
        prop[cli_dest_key] = arg_name
    return prop


def translate(
    package_name: str,
    constraints: Mapping[str, Any],
    *,
    schema_uri: str = DEFAULT_SCHEMA_URI,
    cli_dest_key: str = DEFAULT_CLI_DEST_KEY,
    legacy_self_checks: bool = False,
) -> DriverSchema:
    """Convert an ``argsConstraints`` mapping into a driver schema.

    Properties are keyed by the kebab-case form of each argument name, in
    the mapping's iteration order. Arguments whose names collide after
    normalization overwrite earlier ones.
    """
    if not package_name:
        raise ValueError("package_name must be a non-empty string")

    properties: dict[str, dict[str, Any]] = {}
    required: list[str] = []
    for arg_name, raw in constraints.items():
        descriptor = ConstraintDescriptor.from_value(raw)
        prop_name = kebab_case(arg_name)
        if prop_name in properties:
            logger.warning(
                f"Argument '{arg_name}' collides with an earlier argument as '{prop_name}'"
            )
        properties[prop_name] = build_property(
            arg_name,
            descriptor,
            cli_dest_key=cli_dest_key,
            legacy_self_checks=legacy_self_checks,
        )
        if descriptor.presence and not legacy_self_checks and prop_name not in required:
            required.append(prop_name)

    return DriverSchema.for_package(
        package_name, properties, required, schema_uri=schema_uri
    )
