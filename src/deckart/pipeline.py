"""Sync pipeline orchestration.

Runs the mirror in clear phases:
1. Resolve the border color (before any network traffic)
2. Aggregate the desired card set from the user's decks
3. Reconcile the desired set against the cache directory
4. Materialize the cards that are still missing
5. Report a summary
"""

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Callable, Optional

from deckart.api.moxfield import MoxfieldClient
from deckart.api.scryfall import ScryfallClient
from deckart.colors import resolve_color
from deckart.config.settings import DeckArtSettings
from deckart.core.logging import get_logger, log_operation, run_context
from deckart.errors import ConfigurationError
from deckart.net.network import HttpClient, RateLimiter, RetryConfig
from deckart.services.aggregate import DeckSource, aggregate_card_set
from deckart.services.materialize import CardImageSource, materialize_cards
from deckart.services.reconcile import reconcile_cache

logger = get_logger(__name__)


@dataclass
class SyncSummary:
    """Result of one sync run."""

    username: str
    cache_dir: str
    color: str
    dry_run: bool
    desired: int = 0
    kept: list[str] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)
    malformed: list[str] = field(default_factory=list)
    pending: list[str] = field(default_factory=list)
    written: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class SyncPipeline:
    """Mirrors one user's deck cards into a cache directory."""

    def __init__(
        self,
        decks: DeckSource,
        cards: CardImageSource,
        *,
        temp_dir: Optional[Path] = None,
    ):
        self.decks = decks
        self.cards = cards
        self.temp_dir = temp_dir

    def run(
        self,
        username: str,
        cache_dir: Path,
        color_name: str,
        *,
        dry_run: bool = False,
    ) -> SyncSummary:
        """Execute a full sync.

        Args:
            username: Moxfield user whose decks are mirrored
            cache_dir: Cache directory (created if missing)
            color_name: Border color name
            dry_run: Plan only; nothing is deleted or downloaded

        Returns:
            SyncSummary describing what changed

        Raises:
            DeckArtError: Any fatal error; work already done is not undone
        """
        cache_dir = Path(cache_dir)
        with run_context(username, cache_dir):
            return self._sync(username, cache_dir, color_name, dry_run)

    def _sync(
        self, username: str, cache_dir: Path, color_name: str, dry_run: bool
    ) -> SyncSummary:
        color = resolve_color(color_name)
        summary = SyncSummary(
            username=username,
            cache_dir=str(cache_dir),
            color=color.name,
            dry_run=dry_run,
        )

        with log_operation("Collecting deck cards", user=username):
            desired = aggregate_card_set(username, self.decks)
        summary.desired = len(desired)

        if not dry_run:
            try:
                cache_dir.mkdir(parents=True, exist_ok=True)
            except OSError as error:
                raise ConfigurationError(
                    f"Cannot create cache directory {cache_dir}: {error}"
                ) from error

        with log_operation("Reconciling cache", directory=cache_dir):
            reconciled = reconcile_cache(desired, cache_dir, dry_run=dry_run)
        summary.kept = reconciled.kept
        summary.deleted = reconciled.deleted
        summary.malformed = reconciled.malformed
        summary.pending = sorted(reconciled.pending)

        if dry_run:
            logger.info("Dry run: {} card(s) would be fetched", len(reconciled.pending))
            return summary

        with log_operation("Fetching card images", count=len(reconciled.pending)):
            materialized = materialize_cards(
                reconciled.pending,
                cache_dir,
                color,
                self.cards,
                temp_dir=self.temp_dir,
            )
        summary.written = materialized.written
        summary.skipped = materialized.skipped

        logger.info(
            "Sync complete: {} written, {} skipped, {} deleted, {} already cached",
            len(summary.written),
            len(summary.skipped),
            len(summary.deleted),
            len(summary.kept),
        )
        return summary


def build_pipeline(
    settings: DeckArtSettings,
    *,
    sleep: Optional[Callable[[float], None]] = None,
    http: Optional[HttpClient] = None,
) -> SyncPipeline:
    """Wire clients, HTTP session and rate limiters from settings.

    Args:
        settings: Runtime configuration
        sleep: Sleep function for rate limiting and retries (tests)
        http: Pre-built HTTP client (tests)
    """
    sleep_kwargs = {"sleep": sleep} if sleep is not None else {}

    if http is None:
        http = HttpClient(
            user_agent=settings.user_agent,
            config=RetryConfig(
                max_retries=settings.max_retry_attempts,
                base_delay=settings.retry_base_delay,
                timeout=settings.http_timeout,
            ),
            **sleep_kwargs,
        )

    decks = MoxfieldClient(
        http,
        api_base=settings.moxfield_api_base,
        rate_limiter=RateLimiter(settings.deck_api_interval, **sleep_kwargs),
    )
    cards = ScryfallClient(
        http,
        api_base=settings.scryfall_api_base,
        rate_limiter=RateLimiter(settings.card_api_interval, **sleep_kwargs),
    )
    return SyncPipeline(decks, cards, temp_dir=settings.temp_dir)
