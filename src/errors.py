class AppError(Exception):
    """Base application error for the CEP lookup service."""


class CepProviderError(AppError):
    """Base error for CEP lookup provider failures."""


class InvalidCepError(CepProviderError):
    """Raised when the provider rejects the supplied CEP as malformed (HTTP 400)."""


class CepNotFoundError(CepProviderError):
    """Raised when the provider answers the lookup with HTTP 404."""


class UpstreamServiceError(CepProviderError):
    """Raised when the upstream CEP provider fails or returns an unusable body."""
