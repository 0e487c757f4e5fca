"""Moxfield deck API client.

Only the two endpoints the mirror needs:

- ``GET /v2/users/{username}/decks`` -- the user's deck listing
- ``GET /v2/decks/all/{deckId}`` -- one deck with its boards

Only the first page of the deck listing is requested. Users with more
than ``DECK_PAGE_SIZE`` decks are mirrored partially; a warning is logged
when the listing reports more pages.
"""

from typing import Optional

from deckart.core.logging import get_logger
from deckart.errors import RemoteServiceError, UserNotFoundError
from deckart.models import DeckCard, DeckSummary
from deckart.net.network import HttpClient, RateLimiter

logger = get_logger(__name__)

DECK_PAGE_SIZE = 12


class MoxfieldClient:
    """Read-only access to a user's Moxfield decks."""

    def __init__(
        self,
        http: HttpClient,
        *,
        api_base: str = "https://api2.moxfield.com",
        rate_limiter: Optional[RateLimiter] = None,
    ):
        self.http = http
        self.api_base = api_base.rstrip("/")
        self.rate_limiter = rate_limiter

    def list_decks(self, username: str) -> list[DeckSummary]:
        """Return the first page of a user's decks.

        Raises:
            UserNotFoundError: If Moxfield answers 404 for the user
            RemoteServiceError: For any other non-success response
        """
        url = f"{self.api_base}/v2/users/{username}/decks"
        params = {"pageNumber": 1, "pageSize": DECK_PAGE_SIZE}

        try:
            data = self.http.get_json(url, params=params, rate_limiter=self.rate_limiter)
        except RemoteServiceError as error:
            if error.status == 404:
                raise UserNotFoundError(username, url) from error
            raise

        total_pages = data.get("totalPages") or 1
        if total_pages > 1:
            logger.warning(
                "{} has {} pages of decks; only the first {} decks are mirrored",
                username,
                total_pages,
                DECK_PAGE_SIZE,
            )

        decks = []
        for entry in data.get("data") or []:
            public_id = entry.get("publicId")
            if not public_id:
                logger.warning("Skipping deck without publicId: {}", entry.get("name"))
                continue
            decks.append(DeckSummary(public_id=public_id, name=entry.get("name") or public_id))
        return decks

    def get_deck(self, deck_id: str) -> list[DeckCard]:
        """Return the mainboard entries of a deck.

        Entries without a Scryfall id cannot be mirrored and are skipped.
        """
        url = f"{self.api_base}/v2/decks/all/{deck_id}"
        data = self.http.get_json(url, rate_limiter=self.rate_limiter)

        cards = []
        for key, entry in (data.get("mainboard") or {}).items():
            entry = entry or {}
            card = entry.get("card") or {}
            card_id = card.get("scryfall_id")
            if not card_id:
                logger.warning("Deck {}: no scryfall_id for '{}', skipping", deck_id, key)
                continue
            cards.append(
                DeckCard(
                    card_id=card_id,
                    name=card.get("name") or key,
                    quantity=entry.get("quantity") or 1,
                )
            )
        return cards
