"""confspec — typed specifications for configuration trees.

Declare the expected shape of a configuration section, then validate an
already-parsed tree against it and get back either a typed value or every
validation error at once.
"""

from confspec.config.tree import ConfigTree
from confspec.domain.errors import BadValue, ConfigError, MissingValue, UnknownKey, WrongType
from confspec.domain.exceptions import (
    ConfigLoadError,
    ConfspecError,
    InvalidConfigurationError,
    SpecificationError,
)
from confspec.domain.validated import Invalid, Valid, Validated
from confspec.schema import (
    Specification,
    ValidationOptions,
    VersionedSpecificationRegistry,
    VersionExtractor,
    boolean,
    double,
    duration,
    enum,
    integer,
    nested,
    nested_object,
    string,
)

__version__ = "0.1.0"

__all__ = [
    "BadValue",
    "ConfigError",
    "ConfigLoadError",
    "ConfigTree",
    "ConfspecError",
    "Invalid",
    "InvalidConfigurationError",
    "MissingValue",
    "Specification",
    "SpecificationError",
    "UnknownKey",
    "Valid",
    "Validated",
    "ValidationOptions",
    "VersionExtractor",
    "VersionedSpecificationRegistry",
    "WrongType",
    "__version__",
    "boolean",
    "double",
    "duration",
    "enum",
    "integer",
    "nested",
    "nested_object",
    "string",
]
