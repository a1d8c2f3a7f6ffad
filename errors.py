from typing import Optional


class UpstreamError(Exception):
    """An upstream forecast call for one location failed."""

    def __init__(self, source: str, slug: str, message: str):
        self.source = source  # "weather", "marine", "normalize" or "refresh"
        self.slug = slug
        self.message = message
        super().__init__(f"{source} request for '{slug}' failed: {message}")


class UpstreamTransportError(UpstreamError):
    """Network failure or timeout."""


class UpstreamStatusError(UpstreamError):
    """Upstream answered with a non-success status."""

    def __init__(self, source: str, slug: str, status_code: int, message: Optional[str] = None):
        self.status_code = status_code
        super().__init__(source, slug, message or f"HTTP {status_code}")


class UpstreamParseError(UpstreamError):
    """Upstream body was not valid JSON or had an unexpected shape."""


class NotFoundError(Exception):
    """No data can be served for the requested location."""

    def __init__(self, slug: str, message: Optional[str] = None):
        self.slug = slug
        super().__init__(message or f"Beach '{slug}' not found")


class LocationNotReadyError(NotFoundError):
    """The location is configured but no refresh has stored data for it yet."""

    def __init__(self, slug: str):
        super().__init__(
            slug,
            f"Forecast data for '{slug}' is not available yet. "
            "Please try again in a few moments.",
        )


class ConfigError(Exception):
    """Configuration file could not be loaded."""
