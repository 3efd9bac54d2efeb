"""Typed results crossing the extraction boundary."""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class ExtractionFailureReason(StrEnum):
    QUOTA_EXCEEDED = "quota_exceeded"
    INVALID_RESPONSE = "invalid_response"
    UPSTREAM_ERROR = "upstream_error"
    NOT_CONFIGURED = "not_configured"


@dataclass(frozen=True)
class ExtractionFailure:
    """Why extraction produced nothing."""

    reason: ExtractionFailureReason
    message: str
    retry_after: float | None = None


@dataclass
class ExtractionResult(Generic[T]):
    """Either extracted items or a failure, never both."""

    items: list[T] = field(default_factory=list)
    failure: ExtractionFailure | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def success(cls, items: list[T]) -> "ExtractionResult[T]":
        return cls(items=items)

    @classmethod
    def failed(
        cls,
        reason: ExtractionFailureReason,
        message: str,
        retry_after: float | None = None,
    ) -> "ExtractionResult[T]":
        return cls(failure=ExtractionFailure(reason=reason, message=message, retry_after=retry_after))


RawRecord = dict[str, Any]
