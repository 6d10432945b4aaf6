"""Structured validation errors.

Four kinds, discriminated by ``kind``:

- ``missing_value``: a required key is absent (or null).
- ``wrong_type``: a value is present but cannot be read as the declared type.
- ``bad_value``: the primitive type is right but a domain conversion failed.
- ``unknown_key``: strict mode found a key no property declares.

Every error carries the full ``path`` from the tree root.  Errors produced
deeper in the tree are re-rooted with :meth:`ConfigError.with_containing_path`
as they bubble up through nested specifications.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Annotated, Literal, Self

from pydantic import BaseModel, Field, computed_field

REDACTED = "****"


class ConfigError(BaseModel):
    """Common shape of every validation error."""

    model_config = {"frozen": True}

    kind: str
    path: tuple[str, ...]
    type_name: str | None = None
    message: str

    @computed_field  # type: ignore[prop-decorator]
    @property
    def key_name(self) -> str:
        """Last path segment: the key the error is about."""
        return self.path[-1] if self.path else ""

    @computed_field  # type: ignore[prop-decorator]
    @property
    def dotted_path(self) -> str:
        return ".".join(self.path)

    @property
    def containing_path(self) -> tuple[str, ...]:
        return self.path[:-1]

    def with_containing_path(self, *segments: str) -> Self:
        """Return a copy whose path is prefixed by *segments*."""
        if not segments:
            return self
        return self.model_copy(update={"path": (*segments, *self.path)})

    def redacted(self, secret: str) -> Self:
        """Return a copy with every occurrence of *secret* masked in the message."""
        if not secret or secret not in self.message:
            return self
        return self.model_copy(update={"message": self.message.replace(secret, REDACTED)})

    def describe(self) -> str:
        location = self.dotted_path or "<root>"
        return f"{location}: {self.message}"


class MissingValue(ConfigError):
    kind: Literal["missing_value"] = "missing_value"

    @classmethod
    def of(
        cls,
        key: str,
        type_name: str | None = None,
        containing_path: Sequence[str] = (),
    ) -> MissingValue:
        return cls(
            path=(*containing_path, key),
            type_name=type_name,
            message=f"No configuration setting found for key '{key}'",
        )


class WrongType(ConfigError):
    kind: Literal["wrong_type"] = "wrong_type"
    expected_type: str
    actual_type: str

    @classmethod
    def of(
        cls,
        key: str,
        expected_type: str,
        actual_type: str,
        containing_path: Sequence[str] = (),
    ) -> WrongType:
        return cls(
            path=(*containing_path, key),
            type_name=expected_type,
            expected_type=expected_type,
            actual_type=actual_type,
            message=f"Expected {expected_type} but found {actual_type}",
        )


class BadValue(ConfigError):
    kind: Literal["bad_value"] = "bad_value"
    type_name: str

    @classmethod
    def of(
        cls,
        key: str,
        type_name: str,
        message: str,
        containing_path: Sequence[str] = (),
    ) -> BadValue:
        return cls(path=(*containing_path, key), type_name=type_name, message=message)


class UnknownKey(ConfigError):
    kind: Literal["unknown_key"] = "unknown_key"

    @classmethod
    def of(cls, key: str, containing_path: Sequence[str] = ()) -> UnknownKey:
        return cls(path=(*containing_path, key), message=f"Unknown property '{key}'")


AnyConfigError = Annotated[
    MissingValue | WrongType | BadValue | UnknownKey,
    Field(discriminator="kind"),
]
