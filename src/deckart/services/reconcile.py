"""Cache reconciliation.

Diffs the desired set against the cache directory: files for cards that
are still wanted are kept, files for everything else are deleted, and
whatever is left in the desired set still has to be fetched.
"""

from dataclasses import dataclass, field
from pathlib import Path

from deckart.core.logging import get_logger
from deckart.errors import AssetError, MalformedCacheEntryError
from deckart.naming import parse_card_id

logger = get_logger(__name__)


@dataclass
class ReconcileResult:
    """Outcome of comparing the desired set with the cache directory."""

    pending: dict[str, str]
    kept: list[str] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)
    malformed: list[str] = field(default_factory=list)


def reconcile_cache(
    desired: dict[str, str], cache_dir: Path, *, dry_run: bool = False
) -> ReconcileResult:
    """Purge stale cache files and work out what is missing.

    Files whose name does not follow the naming scheme are reported and
    left alone. Subdirectories are ignored.

    Args:
        desired: Card id to display name; not modified
        cache_dir: Directory holding the cached images
        dry_run: Report deletions without removing anything

    Returns:
        ReconcileResult whose ``pending`` holds the cards to fetch
    """
    pending = dict(desired)
    result = ReconcileResult(pending=pending)

    if not cache_dir.exists():
        return result

    for path in sorted(cache_dir.iterdir()):
        if not path.is_file():
            continue

        try:
            card_id = parse_card_id(path.name)
        except MalformedCacheEntryError as error:
            logger.warning("{}; leaving it in place", error)
            result.malformed.append(path.name)
            continue

        if card_id in pending:
            del pending[card_id]
            result.kept.append(path.name)
            continue

        if dry_run:
            logger.info("Would delete {}", path.name)
        else:
            try:
                path.unlink()
            except OSError as error:
                raise AssetError(f"Could not delete stale file {path}: {error}") from error
            logger.info("Deleted {}", path.name)
        result.deleted.append(path.name)

    logger.info(
        "Cache: {} kept, {} deleted, {} to fetch",
        len(result.kept),
        len(result.deleted),
        len(pending),
    )
    return result
