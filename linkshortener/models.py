from dataclasses import dataclass
from datetime import datetime


# fmt: off
@dataclass(frozen=True)
class URLModel:
    id: int                 # Monotonic identifier assigned by the persistent store
    original_url: str       # Original long URL the short code redirects to
    user_id: str            # Owner of the URL (GUEST_USER_ID for anonymous users)
    clicks: int = 0         # Number of redirects served for this URL
    created_at: datetime | None = None
# fmt: on


@dataclass(frozen=True)
class Pagination:
    """Pagination metadata attached to a page of user URLs.

    Attributes:
        total (int):
            Total number of URLs owned by the user.
        page (int):
            Page actually served (clamped to the last page when the requested one is past the end).
        limit (int):
            Page size.
        has_more (bool):
            True if further URLs exist after this page.
    """

    total: int
    page: int
    limit: int
    has_more: bool

    def to_dict(self) -> dict:
        return {
            'total': self.total,
            'page': self.page,
            'limit': self.limit,
            'hasMore': self.has_more,
        }
