"""Image materialization.

Fetches each missing card, paints its transparent corners with the chosen
border color and writes the result into the cache as JPEG.
"""

import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Protocol

from PIL import Image

from deckart.colors import ColorSpec
from deckart.core.logging import get_logger
from deckart.errors import AssetError
from deckart.models import CardImage
from deckart.naming import build_filename

logger = get_logger(__name__)


class CardImageSource(Protocol):
    def get_card_image(self, card_id: str) -> CardImage: ...

    def download_image(self, url: str, destination: Path) -> Path: ...


@dataclass
class MaterializeResult:
    """Files written and cards skipped during materialization."""

    written: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


def composite_onto_color(source: Path, color: ColorSpec, destination: Path) -> None:
    """Draw an image over a solid color and save it as JPEG.

    The canvas has the source's size; the source is pasted unscaled at the
    origin using its own alpha, so only transparent pixels show the color.

    Raises:
        AssetError: If the source cannot be decoded or the JPEG not written
    """
    try:
        with Image.open(source) as image:
            artwork = image.convert("RGBA")

        canvas = Image.new("RGB", artwork.size, color.rgb)
        canvas.paste(artwork, (0, 0), artwork)
        canvas.save(destination, format="JPEG")
    except OSError as error:
        destination.unlink(missing_ok=True)
        raise AssetError(f"Could not composite {source.name}: {error}") from error


def materialize_cards(
    pending: dict[str, str],
    cache_dir: Path,
    color: ColorSpec,
    cards: CardImageSource,
    *,
    temp_dir: Optional[Path] = None,
) -> MaterializeResult:
    """Fetch, tint and store every pending card.

    Low-resolution cards are skipped and logged. Any other failure
    propagates and stops the run; files written so far stay in place.

    Args:
        pending: Card id to display name for cards not yet cached
        cache_dir: Destination directory
        color: Border color
        cards: Metadata and image source
        temp_dir: Staging directory for raw downloads

    Returns:
        MaterializeResult listing written file names and skipped card ids
    """
    result = MaterializeResult()
    staging = Path(temp_dir) if temp_dir else Path(tempfile.gettempdir())
    try:
        cache_dir.mkdir(parents=True, exist_ok=True)
    except OSError as error:
        raise AssetError(f"Cannot create cache directory {cache_dir}: {error}") from error

    for index, (card_id, name) in enumerate(pending.items(), start=1):
        info = cards.get_card_image(card_id)
        if not info.highres:
            logger.info("Skipping {} ({}): no high resolution image", name, card_id)
            result.skipped.append(card_id)
            continue

        raw_path = staging / f"{card_id}.raw"
        filename = build_filename(name, card_id)
        try:
            cards.download_image(info.image_url, raw_path)
            composite_onto_color(raw_path, color, cache_dir / filename)
        finally:
            raw_path.unlink(missing_ok=True)

        logger.info("[{}/{}] Wrote {}", index, len(pending), filename)
        result.written.append(filename)

    return result
