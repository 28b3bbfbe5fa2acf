"""Convert driver argsConstraints maps into JSON Schema configuration documents."""

from argschema.config import ArgSchemaConfig, load_config
from argschema.errors import ArgSchemaError
from argschema.migrate import MigrationResult, migrate
from argschema.naming import camel_case, kebab_case
from argschema.translator import build_property, translate
from argschema.types import ConstraintDescriptor, DriverSchema

__all__ = [
    "ArgSchemaConfig",
    "ArgSchemaError",
    "ConstraintDescriptor",
    "DriverSchema",
    "MigrationResult",
    "build_property",
    "camel_case",
    "kebab_case",
    "load_config",
    "migrate",
    "translate",
]
