"""Validation options."""

from __future__ import annotations

from pydantic import BaseModel


class ValidationOptions(BaseModel):
    """Per-call validation switches.

    Attributes:
        strict: Report keys present in the tree but not declared by the
            specification as ``UnknownKey`` errors.
        exempt_paths: Paths strict mode never reports, nor any of their
            ancestors (e.g. the version key of a versioned configuration).
    """

    model_config = {"frozen": True}

    strict: bool = False
    exempt_paths: tuple[tuple[str, ...], ...] = ()

    def lenient(self) -> ValidationOptions:
        if not self.strict:
            return self
        return self.model_copy(update={"strict": False})

    def exempting(self, *paths: tuple[str, ...]) -> ValidationOptions:
        return self.model_copy(update={"exempt_paths": (*self.exempt_paths, *paths)})

    def is_exempt(self, path: tuple[str, ...]) -> bool:
        """True when *path* is an exempt path or one of its ancestors."""
        return any(exempt[: len(path)] == path for exempt in self.exempt_paths)


DEFAULT_OPTIONS = ValidationOptions()
