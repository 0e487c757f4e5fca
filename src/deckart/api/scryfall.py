"""Scryfall card API client.

Fetches single-card metadata and card images. Scryfall asks clients to
keep 50-100ms between requests; the configured limiter pauses before
both metadata lookups and image downloads.
"""

from pathlib import Path
from typing import Any, Optional

from deckart.errors import UnexpectedCardShapeError
from deckart.models import CardImage
from deckart.net.network import HttpClient, RateLimiter


def select_image_url(card_id: str, card: dict[str, Any]) -> str:
    """Pick the PNG image of a card.

    Single-faced cards carry ``image_uris`` directly. Double-faced cards
    carry ``card_faces`` instead, and the front face is used.

    Raises:
        UnexpectedCardShapeError: If neither shape is present
    """
    image_uris = card.get("image_uris")
    if isinstance(image_uris, dict) and image_uris.get("png"):
        return image_uris["png"]

    faces = card.get("card_faces")
    if isinstance(faces, list) and faces:
        face_uris = (faces[0] or {}).get("image_uris")
        if isinstance(face_uris, dict) and face_uris.get("png"):
            return face_uris["png"]

    raise UnexpectedCardShapeError(card_id)


class ScryfallClient:
    """Card metadata and image downloads from Scryfall."""

    def __init__(
        self,
        http: HttpClient,
        *,
        api_base: str = "https://api.scryfall.com",
        rate_limiter: Optional[RateLimiter] = None,
    ):
        self.http = http
        self.api_base = api_base.rstrip("/")
        self.rate_limiter = rate_limiter

    def get_card_image(self, card_id: str) -> CardImage:
        """Look up a card and resolve its image URL.

        Low-resolution cards are returned without a URL so the caller can
        skip them without tripping the shape check.
        """
        card = self.http.get_json(
            f"{self.api_base}/cards/{card_id}", rate_limiter=self.rate_limiter
        )

        if not card.get("highres_image"):
            return CardImage(card_id=card_id, highres=False)

        return CardImage(
            card_id=card_id, highres=True, image_url=select_image_url(card_id, card)
        )

    def download_image(self, url: str, destination: Path) -> Path:
        return self.http.download(url, destination, rate_limiter=self.rate_limiter)
