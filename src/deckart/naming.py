"""Cache file naming scheme.

The cache directory is its own index: every image is stored as

    <sanitized display name> &<card id>.jpg

and the card id embedded after the delimiter is the only identity key.
The display-name prefix is cosmetic and may change between runs.

Scheme version 1 rules:
- The delimiter is the LAST ``&`` in the file name, so display names that
  contain ``&`` (e.g. "Fire & Ice") still parse. Card ids never contain it.
- The extension is always ``.jpg``.
- Characters that are illegal in file names become ``-``.
"""

from deckart.errors import MalformedCacheEntryError

SCHEME_VERSION = 1
ID_DELIMITER = "&"
EXTENSION = ".jpg"

_ILLEGAL_CHARACTERS = frozenset('<>:"/\\|?*') | frozenset(chr(i) for i in range(32))


def sanitize_display_name(name: str) -> str:
    """Replace every character that is illegal in a file name with ``-``.

    Examples:
        >>> sanitize_display_name("Fire // Ice")
        'Fire -- Ice'
        >>> sanitize_display_name('Who? What?')
        'Who- What-'
    """
    return "".join("-" if ch in _ILLEGAL_CHARACTERS else ch for ch in name)


def build_filename(display_name: str, card_id: str) -> str:
    """Build the cache file name for a card.

    Raises:
        ValueError: If the card id is empty or contains the delimiter
    """
    if not card_id or ID_DELIMITER in card_id:
        raise ValueError(f"Card id {card_id!r} cannot be encoded in a file name")
    return f"{sanitize_display_name(display_name)} {ID_DELIMITER}{card_id}{EXTENSION}"


def parse_card_id(filename: str) -> str:
    """Extract the card id embedded in a cache file name.

    Args:
        filename: Bare file name (no directory)

    Returns:
        The card id between the last delimiter and the extension

    Raises:
        MalformedCacheEntryError: If the name does not follow the scheme
    """
    if not filename.endswith(EXTENSION):
        raise MalformedCacheEntryError(filename, f"expected a {EXTENSION} file")

    stem = filename[: -len(EXTENSION)]
    _, delimiter, card_id = stem.rpartition(ID_DELIMITER)
    if not delimiter:
        raise MalformedCacheEntryError(filename, f"no '{ID_DELIMITER}' delimiter")
    if not card_id or card_id != card_id.strip():
        raise MalformedCacheEntryError(filename, "empty or padded card id")

    return card_id
