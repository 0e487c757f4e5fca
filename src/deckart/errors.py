"""Exception hierarchy for Deck Art Mirror.

Provides structured error handling with specific exception types
for different failure modes.
"""

from typing import Optional


class DeckArtError(Exception):
    """Base exception for all Deck Art Mirror errors.

    All custom exceptions inherit from this base class for easy catching.
    """

    pass


class ConfigurationError(DeckArtError):
    """Configuration errors (invalid settings, unknown options)."""

    pass


class InvalidColorError(ConfigurationError):
    """The requested border color is not a known color name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f"Unknown color '{name}'. Use --list-colors to see valid names."
        )


class NetworkError(DeckArtError):
    """Network-related errors (downloads, API calls, timeouts)."""

    pass


class RemoteServiceError(NetworkError):
    """A remote API answered with a non-success status."""

    def __init__(self, status: Optional[int], url: str, message: Optional[str] = None):
        self.status = status
        self.url = url
        super().__init__(message or f"Remote service returned HTTP {status} for {url}")


class UserNotFoundError(RemoteServiceError):
    """The deck-listing service does not know the requested user."""

    def __init__(self, username: str, url: str):
        self.username = username
        super().__init__(404, url, f"Moxfield user '{username}' was not found.")


class AssetError(DeckArtError):
    """Image errors (undecodable downloads, unwritable cache files)."""

    pass


class ValidationError(DeckArtError):
    """Validation errors (malformed data, unexpected payloads)."""

    pass


class UnexpectedCardShapeError(ValidationError):
    """Card metadata exposes neither a direct image nor card faces."""

    def __init__(self, card_id: str):
        self.card_id = card_id
        super().__init__(
            f"Card {card_id} has neither image_uris nor card_faces with images."
        )


class MalformedCacheEntryError(ValidationError):
    """A file in the cache directory does not follow the naming scheme."""

    def __init__(self, filename: str, reason: str):
        self.filename = filename
        self.reason = reason
        super().__init__(f"Malformed cache entry '{filename}': {reason}")
