class ExtractionError(Exception):
    """Raised when a provider call fails for a reason with no specific category."""


class ExtractionAuthError(ExtractionError):
    """Raised when the provider rejects the configured credentials."""


class ExtractionQuotaError(ExtractionError):
    """Raised when the provider reports a rate or quota limit."""


class ExtractionNetworkError(ExtractionError):
    """Raised when the provider call fails due to network/infrastructure issues."""


class ExtractionResponseError(ExtractionError):
    """Raised when the provider answer cannot be interpreted."""
