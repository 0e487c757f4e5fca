"""Border color lookup.

Colors are chosen by name from Pillow's named-color table, which covers
the CSS/X11 color names. Hex codes and ``rgb()`` expressions are rejected
so the palette stays an enumerable set of names.
"""

from dataclasses import dataclass

from PIL import ImageColor

from deckart.errors import InvalidColorError


@dataclass(frozen=True)
class ColorSpec:
    """A resolved, immutable fill color."""

    name: str
    r: int
    g: int
    b: int

    @property
    def rgb(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)


def _normalize(name: str) -> str:
    return "".join(ch for ch in name.lower() if ch not in " _-")


def available_colors() -> list[str]:
    """Return every accepted color name, sorted."""
    return sorted(ImageColor.colormap)


def resolve_color(name: str) -> ColorSpec:
    """Resolve a human-readable color name to an RGB triple.

    Matching ignores case, spaces, underscores and dashes, so "Black",
    "dark gray" and "Dark_Gray" are all accepted.

    Args:
        name: Color name, e.g. "Black" or "DarkSlateGray"

    Returns:
        ColorSpec with the canonical palette name

    Raises:
        InvalidColorError: If the name is not in the palette
    """
    key = _normalize(name or "")
    if key not in ImageColor.colormap:
        raise InvalidColorError(name)

    r, g, b = ImageColor.getrgb(key)[:3]
    return ColorSpec(name=key, r=r, g=g, b=b)
