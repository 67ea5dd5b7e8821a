"""Color utilities for visuals."""

from matplotlib import colormaps

# Tableau 10, the same palette as matplotlib's "tab10"
PALETTE: tuple[tuple[float, float, float], ...] = tuple(colormaps["tab10"].colors)


def get_category_color(name: str, cache: dict | None = None) -> tuple:
    """Assign palette colors to categories in order of first request.

    Args:
        name: Category label.
        cache: Optional dict[str, tuple] holding assignments made so far; the
            next unseen name gets the next palette slot.

    Returns:
        RGB tuple (0-1 each).
    """
    if cache is None:
        return PALETTE[0]
    if name not in cache:
        cache[name] = PALETTE[len(cache) % len(PALETTE)]
    return cache[name]
