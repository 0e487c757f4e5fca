"""Card set aggregation.

Walks every deck of a user and collects the distinct mainboard cards.
"""

from typing import Protocol

from deckart.core.logging import get_logger
from deckart.models import DeckCard, DeckSummary

logger = get_logger(__name__)


class DeckSource(Protocol):
    def list_decks(self, username: str) -> list[DeckSummary]: ...

    def get_deck(self, deck_id: str) -> list[DeckCard]: ...


def aggregate_card_set(username: str, decks: DeckSource) -> dict[str, str]:
    """Build the desired set for a user.

    The first name seen for a card id wins; later entries with the same
    id (another deck, or the same card listed twice) are ignored.

    Args:
        username: Moxfield user name
        decks: Deck listing/detail source

    Returns:
        Mapping of card id to display name
    """
    desired: dict[str, str] = {}

    summaries = decks.list_decks(username)
    logger.info("Found {} deck(s) for {}", len(summaries), username)

    for summary in summaries:
        cards = decks.get_deck(summary.public_id)
        added = 0
        for card in cards:
            if card.card_id in desired:
                continue
            desired[card.card_id] = card.name
            added += 1
        logger.debug(
            "Deck '{}' ({}): {} mainboard entries, {} new",
            summary.name,
            summary.public_id,
            len(cards),
            added,
        )

    logger.info("Desired set has {} unique card(s)", len(desired))
    return desired
