"""End-to-end tests for SyncPipeline with fake remote services."""

import pytest

from deckart.config.settings import DeckArtSettings
from deckart.errors import ConfigurationError, InvalidColorError, UserNotFoundError
from deckart.naming import parse_card_id
from deckart.pipeline import SyncPipeline, build_pipeline


@pytest.fixture
def two_decks(deck_source_factory):
    return deck_source_factory(
        users={"alice": ["d1", "d2"]},
        decks={
            "d1": [("a", "Alpha", 1), ("b", "Beta", 4)],
            "d2": [("b", "Beta", 1), ("c", "Gamma // Delta", 1), ("low", "Blurry", 1)],
        },
    )


@pytest.fixture
def card_art(card_source_factory, png_factory):
    return card_source_factory(
        cards={
            "a": (True, png_factory()),
            "b": (True, png_factory()),
            "c": (True, png_factory()),
            "low": (False, b""),
        }
    )


def _ids_on_disk(cache_dir):
    return sorted(parse_card_id(p.name) for p in cache_dir.iterdir())


class TestSyncPipeline:
    """Tests for SyncPipeline.run()."""

    def test_full_run(self, tmp_path, staging_dir, two_decks, card_art):
        cache_dir = tmp_path / "new-cache"
        pipeline = SyncPipeline(two_decks, card_art, temp_dir=staging_dir)

        summary = pipeline.run("alice", cache_dir, "Black")

        assert summary.desired == 4
        assert summary.skipped == ["low"]
        assert sorted(summary.written) == ["Alpha &a.jpg", "Beta &b.jpg", "Gamma -- Delta &c.jpg"]
        assert _ids_on_disk(cache_dir) == ["a", "b", "c"]
        assert summary.color == "black"

    def test_each_card_fetched_once(self, cache_dir, staging_dir, two_decks, card_art):
        SyncPipeline(two_decks, card_art, temp_dir=staging_dir).run("alice", cache_dir, "black")

        metadata_calls = card_art.calls_named("get_card_image")
        assert sorted(metadata_calls) == ["a", "b", "c", "low"]
        assert len(card_art.calls_named("download_image")) == 3

    def test_second_run_is_idempotent(self, cache_dir, staging_dir, two_decks, card_art):
        pipeline = SyncPipeline(two_decks, card_art, temp_dir=staging_dir)
        pipeline.run("alice", cache_dir, "black")
        downloads_after_first = len(card_art.calls_named("download_image"))

        summary = pipeline.run("alice", cache_dir, "black")

        assert summary.written == []
        assert summary.deleted == []
        assert len(summary.kept) == 3
        assert len(card_art.calls_named("download_image")) == downloads_after_first

    def test_stale_files_purged(self, cache_dir, staging_dir, two_decks, card_art):
        (cache_dir / "Retired &old-1.jpg").write_bytes(b"x")
        (cache_dir / "Alpha &a.jpg").write_bytes(b"cached")

        summary = SyncPipeline(two_decks, card_art, temp_dir=staging_dir).run("alice", cache_dir, "black")

        assert summary.deleted == ["Retired &old-1.jpg"]
        assert summary.kept == ["Alpha &a.jpg"]
        assert (cache_dir / "Alpha &a.jpg").read_bytes() == b"cached"
        assert "a" not in card_art.calls_named("get_card_image")

    def test_user_with_zero_decks(self, cache_dir, deck_source_factory, card_source_factory):
        decks = deck_source_factory(users={"alice": []})
        cards = card_source_factory()
        (cache_dir / "Stale &x.jpg").write_bytes(b"x")

        summary = SyncPipeline(decks, cards).run("alice", cache_dir, "black")

        assert decks.calls == [("list_decks", "alice")]
        assert cards.calls == []
        assert summary.deleted == ["Stale &x.jpg"]
        assert list(cache_dir.iterdir()) == []

    def test_invalid_color_before_network(self, cache_dir, two_decks, card_art):
        with pytest.raises(InvalidColorError):
            SyncPipeline(two_decks, card_art).run("alice", cache_dir, "NotAColor")

        assert two_decks.calls == []
        assert card_art.calls == []

    def test_unknown_user_before_file_io(self, cache_dir, deck_source_factory, card_art):
        (cache_dir / "Keep &k.jpg").write_bytes(b"x")

        with pytest.raises(UserNotFoundError):
            SyncPipeline(deck_source_factory(), card_art).run("ghost", cache_dir, "black")

        assert (cache_dir / "Keep &k.jpg").exists()

    def test_uncreatable_cache_dir(self, tmp_path, deck_source_factory, card_source_factory):
        (tmp_path / "blocker.txt").write_text("not a directory")
        target = tmp_path / "blocker.txt" / "cards"
        pipeline = SyncPipeline(deck_source_factory(users={"alice": []}), card_source_factory())

        with pytest.raises(ConfigurationError) as excinfo:
            pipeline.run("alice", target, "black")

        assert str(target) in str(excinfo.value)

    def test_dry_run_changes_nothing(self, cache_dir, two_decks, card_art):
        (cache_dir / "Retired &old-1.jpg").write_bytes(b"x")

        summary = SyncPipeline(two_decks, card_art).run("alice", cache_dir, "black", dry_run=True)

        assert summary.deleted == ["Retired &old-1.jpg"]
        assert summary.pending == ["a", "b", "c", "low"]
        assert summary.written == []
        assert card_art.calls == []
        assert (cache_dir / "Retired &old-1.jpg").exists()

    def test_summary_serializes(self, cache_dir, staging_dir, two_decks, card_art):
        summary = SyncPipeline(two_decks, card_art, temp_dir=staging_dir).run("alice", cache_dir, "black")

        data = summary.to_dict()
        assert data["username"] == "alice"
        assert data["desired"] == 4
        assert data["skipped"] == ["low"]


class TestBuildPipeline:
    """Tests for build_pipeline() wiring."""

    def test_rate_limits_from_settings(self, tmp_path):
        settings = DeckArtSettings(
            deck_api_interval=0.5,
            card_api_interval=0.2,
            moxfield_api_base="https://mox.test",
            scryfall_api_base="https://sf.test",
            temp_dir=tmp_path,
        )

        pipeline = build_pipeline(settings, sleep=lambda _: None)

        assert pipeline.decks.rate_limiter.interval == 0.5
        assert pipeline.cards.rate_limiter.interval == 0.2
        assert pipeline.decks.api_base == "https://mox.test"
        assert pipeline.cards.api_base == "https://sf.test"
        assert pipeline.decks.http is pipeline.cards.http
        assert pipeline.temp_dir == tmp_path

    def test_retry_settings_applied(self):
        settings = DeckArtSettings(max_retry_attempts=5, retry_base_delay=1.5, http_timeout=10)

        http = build_pipeline(settings).decks.http

        assert http.config.max_retries == 5
        assert http.config.base_delay == 1.5
        assert http.config.timeout == 10
        assert http.session.headers["User-Agent"] == settings.user_agent
