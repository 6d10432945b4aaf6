"""Exception hierarchy for confspec.

Data problems in a configuration tree are never raised: they travel as
:class:`~confspec.domain.validated.Validated` values.  The exceptions here
cover the two other situations:

* malformed specifications (duplicate keys, illegal combinator chains),
  which are programming errors;
* a caller insisting on a value from a result that turned out invalid.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from confspec.domain.errors import ConfigError


class ConfspecError(Exception):
    """Base type for all exceptions raised by confspec."""


class SpecificationError(ConfspecError):
    """A specification was declared incorrectly."""


class ConfigLoadError(ConfspecError):
    """A configuration file could not be read or parsed."""


class InvalidConfigurationError(ConfspecError):
    """Raised when a value is requested from an invalid result.

    Attributes:
        errors: Every validation error that made the result invalid.
    """

    def __init__(self, errors: Iterable[ConfigError]) -> None:
        self.errors: tuple[ConfigError, ...] = tuple(errors)
        lines = "\n".join(f"  - {error.describe()}" for error in self.errors)
        super().__init__(f"Invalid configuration ({len(self.errors)} error(s)):\n{lines}")
