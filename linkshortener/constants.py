from enum import StrEnum


class TTL:
    """TTL durations in seconds."""

    # Single-URL cache entries (redirect target by id) (24 hours in seconds)
    URL = 86_400  # 60 * 60 * 24
    # Paginated per-user listing cache entries (5 minutes in seconds)
    USER_URLS = 300  # 60 * 5
    # Cache layer default, used when a caller passes ttl=0 or None (10 minutes in seconds)
    DEFAULT = 600  # 60 * 10
    # Interval between background sweeps of expired cache entries
    CHECK_PERIOD = 120


class DefaultQuota:
    """Default quota values."""

    LINK_GENERATION = 20  # Max number of URLs a signed-in user may own


class Pagination:
    """Default pagination parameters for user URL listings."""

    PAGE = 1
    LIMIT = 5
    TOP_URLS = 5  # Number of top URLs reported in user stats


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        PROJECT_ROOT = 'PROJECT_ROOT'
        AWS_SAM_LOCAL = 'AWS_SAM_LOCAL'
        LOG_LEVEL = 'LOG_LEVEL'
        CONFIG_FILE = 'CONFIG_FILE'
        HOST = 'HOST'

    class Cache(StrEnum):
        BACKEND = 'CACHE_BACKEND'  # 'memory' or 'redis'
        DEFAULT_TTL = 'CACHE_DEFAULT_TTL'
        CHECK_PERIOD = 'CACHE_CHECK_PERIOD'
        MAX_KEYS = 'CACHE_MAX_KEYS'


# Placeholder short URL domain; deployments must set HOST
DEFAULT_SHORT_URL_DOMAIN = 'short.url'

# Owner id recorded for URLs created without a signed-in user
GUEST_USER_ID = '0'

# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
MISSING_SHORTCODE = 'MISSING_SHORTCODE'
INVALID_SHORTCODE = 'INVALID_SHORTCODE'
SHORT_URL_NOT_FOUND = 'SHORT_URL_NOT_FOUND'
MISSING_USER_ID = 'MISSING_USER_ID'
MISSING_TARGET_URL = 'MISSING_TARGET_URL'
INVALID_JSON_BODY = 'INVALID_JSON_BODY'
INVALID_URL_ID = 'INVALID_URL_ID'
INVALID_PAGINATION = 'INVALID_PAGINATION'
LINK_QUOTA_EXCEEDED = 'LINK_QUOTA_EXCEEDED'
URL_OWNERSHIP_MISMATCH = 'URL_OWNERSHIP_MISMATCH'
REDIRECT_SUCCESS = 'REDIRECT_SUCCESS'
