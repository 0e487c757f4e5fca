"""Shared fixtures: fake remote services and generated card art."""

import io
import json
from pathlib import Path

import pytest
import requests
from loguru import logger
from PIL import Image

from deckart.errors import RemoteServiceError, UserNotFoundError
from deckart.models import CardImage, DeckCard, DeckSummary


@pytest.fixture(autouse=True)
def _reset_loguru():
    """Drop sinks added during a test so they never outlive its streams."""
    yield
    logger.remove()


def make_png(size=(32, 48), color=(200, 30, 30, 255), corner=16) -> bytes:
    """Render an RGBA card whose corner blocks are fully transparent.

    Corner blocks are 16px so they line up with JPEG macroblocks and keep
    their color after lossy encoding.
    """
    image = Image.new("RGBA", size, color)
    if corner:
        width, height = size
        clear = Image.new("RGBA", (corner, corner), (0, 0, 0, 0))
        for x, y in [(0, 0), (width - corner, 0), (0, height - corner), (width - corner, height - corner)]:
            image.paste(clear, (x, y))
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


class FakeDeckSource:
    """In-memory stand-in for the Moxfield client."""

    def __init__(self, users=None, decks=None):
        self.users = users or {}
        self.decks = decks or {}
        self.calls = []

    def list_decks(self, username):
        self.calls.append(("list_decks", username))
        if username not in self.users:
            raise UserNotFoundError(username, f"https://moxfield.test/v2/users/{username}/decks")
        return [DeckSummary(public_id=deck_id, name=deck_id) for deck_id in self.users[username]]

    def get_deck(self, deck_id):
        self.calls.append(("get_deck", deck_id))
        return [DeckCard(card_id=card_id, name=name, quantity=qty) for card_id, name, qty in self.decks[deck_id]]


class FakeCardSource:
    """In-memory stand-in for the Scryfall client."""

    def __init__(self, cards=None, fail_on=None):
        self.cards = cards or {}
        self.fail_on = fail_on or set()
        self.calls = []

    def get_card_image(self, card_id):
        self.calls.append(("get_card_image", card_id))
        if card_id in self.fail_on:
            raise RemoteServiceError(500, f"https://scryfall.test/cards/{card_id}")
        highres, _ = self.cards[card_id]
        if not highres:
            return CardImage(card_id=card_id, highres=False)
        return CardImage(card_id=card_id, highres=True, image_url=f"https://img.test/{card_id}.png")

    def download_image(self, url, destination: Path):
        self.calls.append(("download_image", url))
        card_id = url.rsplit("/", 1)[-1][: -len(".png")]
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_bytes(self.cards[card_id][1])
        return destination

    def calls_named(self, name):
        return [args for call, args in self.calls if call == name]


class FakeSession:
    """Minimal ``requests.Session`` replacement returning queued responses."""

    def __init__(self, responses=None):
        self.headers = {}
        self.responses = list(responses or [])
        self.requests = []

    def get(self, url, params=None, timeout=None):
        self.requests.append((url, params))
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


def make_response(status=200, json_body=None, content=None, url=None) -> requests.Response:
    response = requests.Response()
    response.status_code = status
    if json_body is not None:
        response._content = json.dumps(json_body).encode("utf-8")
    else:
        response._content = content or b""
    response.url = url
    return response


@pytest.fixture
def png_factory():
    return make_png


@pytest.fixture
def deck_source_factory():
    return FakeDeckSource


@pytest.fixture
def card_source_factory():
    return FakeCardSource


@pytest.fixture
def fake_session_factory():
    return FakeSession


@pytest.fixture
def response_factory():
    return make_response


@pytest.fixture
def cache_dir(tmp_path):
    directory = tmp_path / "cards"
    directory.mkdir()
    return directory


@pytest.fixture
def staging_dir(tmp_path):
    directory = tmp_path / "staging"
    directory.mkdir()
    return directory
