"""Schema layer — property definitions, specifications, version dispatch."""

from confspec.schema.delegates import (
    PropertyDelegate,
    boolean,
    double,
    duration,
    enum,
    integer,
    nested,
    nested_object,
    string,
)
from confspec.schema.extractors import ValueType
from confspec.schema.options import ValidationOptions
from confspec.schema.property import PropertyDefinition
from confspec.schema.specification import Specification, SpecificationBuilder
from confspec.schema.versioned import VersionedSpecificationRegistry, VersionExtractor

__all__ = [
    "PropertyDefinition",
    "PropertyDelegate",
    "Specification",
    "SpecificationBuilder",
    "ValidationOptions",
    "ValueType",
    "VersionExtractor",
    "VersionedSpecificationRegistry",
    "boolean",
    "double",
    "duration",
    "enum",
    "integer",
    "nested",
    "nested_object",
    "string",
]
