"""ServiceResult and ServiceError — the envelope adapters consume.

The conditional primitives speak in tagged values (``Found``, ``Ok``,
``Err``...). Adapters such as the CLI want one uniform, serializable
shape; :func:`from_outcome` converts any tagged value into it.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from upsertctl.domain.outcomes import Err, Found, NotFound, Ok


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Uniform return type for service-level operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"upsert_by"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (selectors used, counts, etc.).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None


def from_outcome(
    op: str,
    outcome: Found | NotFound | Ok | Err,
    *,
    meta: dict[str, Any] | None = None,
) -> ServiceResult:
    """Wrap a lookup outcome or persistence result in a ServiceResult.

    ``NotFound`` is a successful lookup (``ok=True``, ``found=False``);
    only ``Err`` produces ``ok=False``.
    """
    match outcome:
        case Err(code=code, message=message, detail=detail):
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(code=str(code), message=message, detail=detail),
                meta=meta,
            )
        case Found(record=record):
            data = {"found": True, **_record_data(record)}
        case NotFound(record=record):
            data = {"found": False, **_record_data(record)}
        case Ok(record=record):
            data = _record_data(record)
        case _:
            msg = f"Not a tagged outcome: {outcome!r}"
            raise TypeError(msg)
    return ServiceResult(ok=True, op=op, data=data, meta=meta)


def _record_data(record: Any) -> dict[str, Any]:
    return {
        "kind": record.kind.name,
        "identity": record.kind.identity,
        "record": record.to_dict(),
    }
