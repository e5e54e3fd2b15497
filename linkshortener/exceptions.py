class LinkShortenerError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:linkshortener_error'


class InvalidShortCodeError(LinkShortenerError, ValueError):
    """Raised when a short code contains characters outside the base62 alphabet.

    Callers resolving redirects treat this the same as an unknown short code
    (i.e. "not found"), never as a server fault.
    """

    error_code = 'app:invalid_shortcode_error'

    def __init__(self, shortcode: str, character: str | None = None):
        self.shortcode = shortcode
        self.character = character
        if character is None:
            message = f'Invalid short code {shortcode!r}.'
        else:
            message = f'Invalid character in short code {shortcode!r}: {character!r}.'
        super().__init__(message)


class URLQuotaExceededError(LinkShortenerError):
    """Raised when a user already owns the maximum number of URLs."""

    error_code = 'app:url_quota_exceeded_error'


class URLOwnershipError(LinkShortenerError):
    """Raised when a user attempts to modify a URL owned by somebody else."""

    error_code = 'app:url_ownership_error'


class ConfigurationError(LinkShortenerError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class BadConfigurationError(ConfigurationError, ValueError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'
