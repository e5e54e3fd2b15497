"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    URLNotFoundError:
        Raised when a URL record is not found in the data store.

    DataStoreError:
        Raised when there is an error in the data store (e.g., connection issues, time, OOM, etc.).

    CachePutError:
        Raised when writing or updating a cache entry fails.

Example:
    >>> from linkshortener.dao.exceptions import URLNotFoundError
    >>> raise URLNotFoundError("URL with id '42' not found.")
    Traceback (most recent call last):
        ...
    linkshortener.dao.exceptions.URLNotFoundError: URL with id '42' not found.
"""


class DAOError(Exception):
    """Generic base class for DAO-related exceptions."""

    pass


class URLNotFoundError(DAOError):
    """Exception raised when a URL record is not found in the data store."""

    pass


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. connection issues, timeouts, OOM, etc.
    """

    pass


class CachePutError(DAOError):
    """Exception raised when writing or updating a cache entry fails."""

    pass
