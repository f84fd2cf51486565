"""User-facing wording for extraction failures."""

from vtrenamer.extraction.models import FailureReason

GENERIC_FAILURE_MESSAGE = "Processing error while analysing the document."

_MESSAGES: dict[FailureReason, str] = {
    FailureReason.AUTH_ERROR: (
        "Authentication failed: check the API key configured for the extraction provider."
    ),
    FailureReason.QUOTA_EXCEEDED: "Quota limit exceeded. Try again in a moment.",
    FailureReason.CONNECTION_FAILURE: "Connection to the extraction service failed.",
    FailureReason.NOT_FOUND: "Trip number not found in the document.",
    FailureReason.MALFORMED_RESPONSE: "The extraction service returned an unreadable response.",
}


def failure_message(reason: FailureReason | None) -> str:
    """Return the message shown next to a failed item."""
    if reason is None:
        return GENERIC_FAILURE_MESSAGE
    return _MESSAGES.get(reason, GENERIC_FAILURE_MESSAGE)
