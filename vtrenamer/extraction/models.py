from dataclasses import dataclass
from enum import Enum


class FailureReason(str, Enum):
    """Failure categories a gateway may report for one document."""

    AUTH_ERROR = "auth_error"
    QUOTA_EXCEEDED = "quota_exceeded"
    CONNECTION_FAILURE = "connection_failure"
    NOT_FOUND = "not_found"
    MALFORMED_RESPONSE = "malformed_response"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ExtractionResult:
    """Tagged outcome of one gateway call: an identifier or a failure reason."""

    identifier: str | None = None
    failure_reason: FailureReason | None = None
    detail: str = ""

    @classmethod
    def success(cls, identifier: str) -> "ExtractionResult":
        return cls(identifier=identifier)

    @classmethod
    def failure(cls, reason: FailureReason, detail: str = "") -> "ExtractionResult":
        return cls(failure_reason=reason, detail=detail)

    @property
    def ok(self) -> bool:
        return self.failure_reason is None
