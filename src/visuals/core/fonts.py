"""Font helpers for visuals."""

import os

from matplotlib.font_manager import FontProperties


def _font(file_name: str) -> FontProperties:
    path = os.path.join(os.getcwd(), "assets", "fonts", file_name)
    return FontProperties(
        family="sans-serif",
        style="normal",
        variant="normal",
        weight="bold",
        stretch="normal",
        size="medium",
        fname=path if os.path.exists(path) else None,
    )


def get_fonts() -> tuple[FontProperties, FontProperties]:
    """Load custom fonts used across plots.

    Returns:
        tuple[FontProperties, FontProperties]: (heading_font, label_font)
        using the Montserrat faces under assets/fonts when bundled, and the
        default sans-serif otherwise.
    """
    return _font("Montserrat-Bold.ttf"), _font("Montserrat-SemiBold.ttf")
