"""Error types for argschema."""


class ArgSchemaError(Exception):
    """Base error for schema migration operations."""


class ConfigError(ArgSchemaError):
    """Raised when the argschema config file is missing or malformed."""


class ModuleResolutionError(ArgSchemaError):
    """Raised when a driver path cannot be resolved to a Python module."""


class DriverLoadError(ArgSchemaError):
    """Raised when a driver module cannot be imported or inspected."""


class ManifestError(ArgSchemaError):
    """Raised when a package manifest is missing or cannot be parsed."""


class ManifestConflictError(ManifestError):
    """Raised when a manifest changed on disk between read and write."""


class MainClassMissingError(ArgSchemaError):
    """Raised when the manifest does not declare a driver main class."""


class SchemaExistsError(ArgSchemaError):
    """Raised when the manifest already records a driver schema."""


class ConstraintsNotFoundError(ArgSchemaError):
    """Raised when the driver main class exposes no argument constraints."""
