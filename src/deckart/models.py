"""Plain data carried between the API clients and the pipeline stages."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class DeckSummary:
    """One entry of a user's deck listing."""

    public_id: str
    name: str


@dataclass(frozen=True)
class DeckCard:
    """A mainboard entry of a deck."""

    card_id: str
    name: str
    quantity: int = 1


@dataclass(frozen=True)
class CardImage:
    """Image metadata for a single card.

    ``image_url`` is None when the card is not high resolution; such cards
    are skipped before any URL selection happens.
    """

    card_id: str
    highres: bool
    image_url: Optional[str] = None
