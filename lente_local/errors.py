"""Exceptions raised by the AI query gateway."""


class LenteError(Exception):
    """Base exception for Lente Local errors."""

    pass


class GatewayError(LenteError):
    """Raised when a call to the generative-AI service fails.

    The message is the generic, user-safe text; the provider error is
    chained as ``__cause__``.
    """

    pass


class ConfigurationError(GatewayError):
    """Raised when the API key is missing. Not retried."""

    pass
