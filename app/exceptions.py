class ConfigurationError(RuntimeError):
    """Raised when required settings are missing or malformed at startup."""


class MarketplaceError(Exception):
    """Raised when the marketplace API cannot satisfy a request."""


class RevenueShareError(MarketplaceError):
    """Raised when a product has no usable revenue-share record."""
