"""Resolve ``package.module:attribute`` references to specifications.

The attribute may be a :class:`Specification` instance, a
:class:`Specification` subclass (instantiated with no arguments), or a
:class:`VersionedSpecificationRegistry`.
"""

from __future__ import annotations

import importlib
import logging
from typing import Any

from confspec.domain.exceptions import SpecificationError
from confspec.schema.specification import Specification
from confspec.schema.versioned import VersionedSpecificationRegistry

logger = logging.getLogger(__name__)

Schema = Specification[Any] | VersionedSpecificationRegistry[Any]


def resolve_specification(reference: str) -> Schema:
    """Import and return the schema named by *reference*.

    Raises:
        SpecificationError: If the reference is malformed, cannot be imported,
            or does not name a schema.
    """
    module_name, sep, attribute = reference.partition(":")
    if not sep or not module_name or not attribute:
        raise SpecificationError(
            f"Schema reference '{reference}' must look like 'package.module:attribute'"
        )
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise SpecificationError(f"Cannot import module '{module_name}': {exc}") from exc

    target: Any = module
    for part in attribute.split("."):
        try:
            target = getattr(target, part)
        except AttributeError:
            raise SpecificationError(
                f"Module '{module_name}' has no attribute '{attribute}'"
            ) from None

    if isinstance(target, type) and issubclass(target, Specification):
        target = target()
    if not isinstance(target, Specification | VersionedSpecificationRegistry):
        raise SpecificationError(
            f"'{reference}' is a {type(target).__name__}, not a specification"
        )
    logger.debug("Resolved schema %s to %r", reference, target)
    return target
