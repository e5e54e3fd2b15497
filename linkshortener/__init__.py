"""URL shortener with a base62 short code codec and a read-through cache."""

__version__ = '1.0.0'
