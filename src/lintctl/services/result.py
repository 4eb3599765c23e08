"""ServiceResult and ServiceError — what every lint operation returns.

The CLI renders a ServiceResult and exits with :attr:`ServiceResult.exit_code`.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

EXIT_OK = 0
EXIT_LINT_FAILED = 1


class ServiceError(BaseModel):
    """Why an operation failed: a stable ``code`` plus a human message."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one lint operation.

    Attributes:
        ok: For ``check``, False when any domain failed; always True for
            ``explain`` and ``domains``.
        op: ``"check"``, ``"explain"``, or ``"domains"``.
        data: Operation payload. Kept on failure so per-domain rows can
            still be rendered.
        warnings: Non-fatal notes, printed to stderr outside JSON mode.
        error: Set iff ``ok`` is False.
        meta: Telemetry span tree when ``--verbose`` is on.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(
        cls,
        op: str,
        *,
        code: str,
        message: str,
        data: dict[str, Any] | None = None,
        **detail: Any,
    ) -> ServiceResult:
        """Build an ``ok=False`` result carrying *data* and a ServiceError."""
        return cls(
            ok=False,
            op=op,
            data=data or {},
            error=ServiceError(code=code, message=message, detail=detail),
        )

    @property
    def exit_code(self) -> int:
        return EXIT_OK if self.ok else EXIT_LINT_FAILED
