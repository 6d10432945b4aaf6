"""ServiceResult: what every service operation hands back to the CLI.

INVARIANT: service methods never raise for expected failures; they return
a result with ``ok=False``.  Configuration problems travel as ``issues``
(structured :data:`~confspec.domain.errors.AnyConfigError` values) so that
``--json`` output keeps their kind and path.  ``error`` says why the
operation failed as a whole.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, Field

from confspec.domain.errors import AnyConfigError, ConfigError


class ServiceError(BaseModel):
    """Why an operation failed: a stable ``code`` plus a human message."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of a service operation.

    Attributes:
        ok: Whether the operation succeeded.
        op: Operation name, used to pick a renderer (``"check"``, ``"describe"``).
        data: Operation payload.
        issues: Validation errors found in the configuration.
        warnings: Non-fatal notes for the user.
        error: Set when ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    issues: list[AnyConfigError] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None

    @classmethod
    def failure(
        cls,
        op: str,
        code: str,
        message: str,
        *,
        issues: Iterable[ConfigError] = (),
        data: dict[str, Any] | None = None,
        detail: dict[str, Any] | None = None,
    ) -> ServiceResult:
        return cls(
            ok=False,
            op=op,
            data=data or {},
            issues=list(issues),
            error=ServiceError(code=code, message=message, detail=detail or {}),
        )
