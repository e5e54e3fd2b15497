"""Abstract base class for URL data access objects (DAOs).

This class establishes a consistent contract for the persistent store behind
the cache layer, regardless of the underlying storage mechanism (e.g., Redis,
PostgreSQL).

Responsibilities:
    - Create URL records and assign them monotonic integer identifiers.
    - Look up, count, paginate and delete URL records per user.
    - Track click counts.
    - Standardize error handling across multiple data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from linkshortener.dao.redis import URLRedisDAO

        >>> dao = URLRedisDAO(...)
        >>> url = dao.create('https://example.com/blog/article-123', user_id='42')
        >>> url.id
        123
        >>> dao.hit(123)
        1
        >>> dao.get(123).clicks
        1
"""

from abc import ABC, abstractmethod

from linkshortener.models import URLModel


class URLBaseDAO(ABC):
    """Interface for URL data access objects (DAOs).

    Methods:
        create(original_url: str, user_id: str, **kwargs) -> URLModel:
            Persist a new URL record with a freshly assigned identifier.

        get(url_id: int, **kwargs) -> URLModel:
            Retrieve a URL record by identifier.
            Raises URLNotFoundError if the record does not exist.

        hit(url_id: int, **kwargs) -> int:
            Increment the click counter of a URL record.
            Raises URLNotFoundError if the record does not exist.

        find_by_user(user_id: str, offset: int, limit: int, **kwargs) -> list[URLModel]:
            Retrieve a slice of a user's URL records, newest first.

        count(user_id: str, **kwargs) -> int:
            Count a user's URL records.

        delete(url_id: int, **kwargs) -> URLModel:
            Delete a URL record and return it.
            Raises URLNotFoundError if the record does not exist.

        delete_all(user_id: str, **kwargs) -> list[int]:
            Delete every URL record owned by a user and return their identifiers.

    All methods raise DataStoreError on connection, read or write failure.

    Subclassing:
        Datastore-specific implementations (e.g., URLRedisDAO) must extend
        this class and implement all abstract methods.
    """

    @abstractmethod
    def create(self, original_url: str, user_id: str, **kwargs) -> URLModel:
        """Persist a new URL record.

        Args:
            original_url (str):
                The long URL to shorten.

            user_id (str):
                Owner of the new record.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            URLModel: The stored record, including its assigned identifier.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get(self, url_id: int, **kwargs) -> URLModel:
        """Retrieve a URL record by identifier.

        Raises:
            URLNotFoundError:
                If no record with the given identifier exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def hit(self, url_id: int, **kwargs) -> int:
        """Increment the click counter of a URL record.

        Returns:
            int: The updated click count.

        Raises:
            URLNotFoundError:
                If no record with the given identifier exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def find_by_user(self, user_id: str, offset: int = 0, limit: int = 5, **kwargs) -> list[URLModel]:
        """Retrieve a page of a user's URL records, ordered newest first.

        Args:
            user_id (str):
                Owner of the records.

            offset (int):
                Number of records to skip.

            limit (int):
                Maximum number of records to return.

        Returns:
            list[URLModel]: Up to `limit` records.
        """
        pass

    @abstractmethod
    def count(self, user_id: str, **kwargs) -> int:
        """Count a user's URL records."""
        pass

    @abstractmethod
    def delete(self, url_id: int, **kwargs) -> URLModel:
        """Delete a URL record.

        Returns:
            URLModel: The deleted record.

        Raises:
            URLNotFoundError:
                If no record with the given identifier exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def delete_all(self, user_id: str, **kwargs) -> list[int]:
        """Delete every URL record owned by a user.

        Returns:
            list[int]: Identifiers of the deleted records.
        """
        pass
