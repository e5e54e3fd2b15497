"""Short code codec

This module provides the reversible mapping between the integer identifiers
assigned by the persistent store and the short codes embedded in short URLs.

The mapping is a plain positional base62 numeral system over a fixed alphabet
(A-Z, a-z, 0-9), so:
    - decode_shortcode(encode_id(x)) == x for every x >= 0
    - encode_id() is injective (no padding, no wrap-around)
    - short codes are never stored; they are recomputed from the identifier

Functions:
    encode_id(url_id) -> str:
        Encode a non-negative integer identifier into a short code.

    decode_shortcode(shortcode) -> int:
        Decode a short code back into its integer identifier.

    build_short_url(url_id, domain=None) -> str:
        Compose the public short URL for an identifier.

Example:
    >>> from linkshortener.utils import encode_id, decode_shortcode
    >>> encode_id(123)
    'B9'
    >>> decode_shortcode('B9')
    123
"""

import string

from linkshortener.exceptions import InvalidShortCodeError
from linkshortener.utils.config import short_url_domain


ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits
BASE = len(ALPHABET)
_ALPHABET_INDEX = {character: value for value, character in enumerate(ALPHABET)}

SHORT_URL_PATH = '/r/'


def encode_id(url_id: int) -> str:
    """Encode a non-negative integer identifier into a base62 short code.

    Repeatedly divides by BASE and prepends the alphabet character of each
    remainder, so the most significant digit comes first. Zero encodes to the
    first alphabet character rather than an empty string.

    Args:
        url_id (int):
            Identifier assigned by the persistent store.

    Returns:
        str: Short code of length ceil(log62(url_id + 1)) (1 for url_id == 0).

    Raises:
        TypeError: If url_id is not an integer.
        ValueError: If url_id is negative.

    Example:
        >>> encode_id(0)
        'A'
        >>> encode_id(62)
        'BA'
    """
    if not isinstance(url_id, int) or isinstance(url_id, bool):
        raise TypeError(f'Identifier must be of type integer (given type: {type(url_id)}).')
    if url_id < 0:
        raise ValueError(f'Identifier must be a non-negative integer (given value: {url_id}).')

    if url_id == 0:
        return ALPHABET[0]

    digits = []
    while url_id > 0:
        url_id, remainder = divmod(url_id, BASE)
        digits.append(ALPHABET[remainder])
    return ''.join(reversed(digits))


def decode_shortcode(shortcode: str) -> int:
    """Decode a base62 short code back into its integer identifier.

    Args:
        shortcode (str):
            Non-empty short code, as produced by encode_id().

    Returns:
        int: The identifier the short code was derived from.

    Raises:
        InvalidShortCodeError:
            If the short code is empty, not a string, or contains a character
            outside the alphabet. The error names the offending character.

    Example:
        >>> decode_shortcode('BA')
        62
        >>> decode_shortcode('A!B')
        Traceback (most recent call last):
            ...
        linkshortener.exceptions.InvalidShortCodeError: Invalid character in short code 'A!B': '!'.
    """
    if not isinstance(shortcode, str) or not shortcode:
        raise InvalidShortCodeError(str(shortcode))

    url_id = 0
    for character in shortcode:
        value = _ALPHABET_INDEX.get(character)
        if value is None:
            raise InvalidShortCodeError(shortcode, character)
        url_id = url_id * BASE + value
    return url_id


def build_short_url(url_id: int, domain: str | None = None) -> str:
    """Compose the public short URL for an identifier.

    Args:
        url_id (int):
            Identifier assigned by the persistent store.
        domain (str | None):
            Scheme and host to prefix, e.g. 'https://sho.rt'. Defaults to the
            configured domain (HOST environment variable, see short_url_domain()).

    Returns:
        str: '<domain>/r/<shortcode>'

    Example:
        >>> build_short_url(123, 'https://sho.rt')
        'https://sho.rt/r/B9'
    """
    if domain is None:
        domain = short_url_domain()
    return f'{domain.rstrip("/")}{SHORT_URL_PATH}{encode_id(url_id)}'
