"""Clients for the remote deck and card services."""

from .moxfield import DECK_PAGE_SIZE, MoxfieldClient
from .scryfall import ScryfallClient, select_image_url

__all__ = [
    "DECK_PAGE_SIZE",
    "MoxfieldClient",
    "ScryfallClient",
    "select_image_url",
]
