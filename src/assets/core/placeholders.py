"""SVG placeholder images for loading and error states.

Every function here is pure: the same options always produce the same
``data:image/svg+xml;base64,...`` string.
"""

from __future__ import annotations

import base64
from dataclasses import dataclass
from enum import Enum
from html import escape


class PlaceholderVariant(str, Enum):
    DEFAULT = "default"
    BLURRED = "blurred"
    CYBERPUNK = "cyberpunk"


DEFAULT_BACKGROUND = "#333333"
BLURRED_BACKGROUND = "#1a1a1a"


@dataclass(frozen=True)
class PlaceholderOptions:
    width: int = 320
    height: int = 240
    # None picks the variant default
    background_color: str | None = None
    text_color: str = "#999999"
    text: str = "Loading..."
    font_size: int = 14


def _to_data_url(svg: str) -> str:
    encoded = base64.b64encode(svg.encode("utf-8")).decode("ascii")
    return f"data:image/svg+xml;base64,{encoded}"


def svg_placeholder_markup(options: PlaceholderOptions | None = None) -> str:
    """Return raw SVG markup for the plain placeholder."""
    o = options or PlaceholderOptions()
    return (
        f'<svg width="{o.width}" height="{o.height}" xmlns="http://www.w3.org/2000/svg">'
        f'<rect width="100%" height="100%" fill="{escape(o.background_color or DEFAULT_BACKGROUND)}"/>'
        f'<text x="50%" y="50%" font-family="Arial, sans-serif" font-size="{o.font_size}" '
        f'fill="{escape(o.text_color)}" text-anchor="middle" dy=".3em">{escape(o.text)}</text>'
        "</svg>"
    )


def blurred_placeholder_markup(options: PlaceholderOptions | None = None) -> str:
    """Return raw SVG markup for the gradient/blur placeholder.

    Only ``width``, ``height`` and ``background_color`` are used; the blurred
    variant carries no text. The background defaults to ``#1a1a1a``.
    """
    o = options or PlaceholderOptions()
    bg = escape(o.background_color or BLURRED_BACKGROUND)
    return (
        f'<svg width="{o.width}" height="{o.height}" xmlns="http://www.w3.org/2000/svg">'
        "<defs>"
        '<linearGradient id="grad" x1="0%" y1="0%" x2="100%" y2="100%">'
        f'<stop offset="0%" style="stop-color:{bg};stop-opacity:1" />'
        '<stop offset="50%" style="stop-color:#2a2a2a;stop-opacity:1" />'
        f'<stop offset="100%" style="stop-color:{bg};stop-opacity:1" />'
        "</linearGradient>"
        '<filter id="blur"><feGaussianBlur stdDeviation="3"/></filter>'
        "</defs>"
        '<rect width="100%" height="100%" fill="url(#grad)" filter="url(#blur)"/>'
        "</svg>"
    )


def cyberpunk_placeholder_markup(options: PlaceholderOptions | None = None) -> str:
    """Return raw SVG markup for the neon-framed placeholder.

    Only ``width``, ``height`` and ``text`` are used; colors are fixed.
    """
    o = options or PlaceholderOptions()
    return (
        f'<svg width="{o.width}" height="{o.height}" xmlns="http://www.w3.org/2000/svg">'
        "<defs>"
        '<linearGradient id="cyberpunk" x1="0%" y1="0%" x2="100%" y2="100%">'
        '<stop offset="0%" style="stop-color:#0a0a0a;stop-opacity:1" />'
        '<stop offset="50%" style="stop-color:#1a1a1a;stop-opacity:1" />'
        '<stop offset="100%" style="stop-color:#0a0a0a;stop-opacity:1" />'
        "</linearGradient>"
        '<filter id="glow">'
        '<feGaussianBlur stdDeviation="2" result="coloredBlur"/>'
        '<feMerge><feMergeNode in="coloredBlur"/><feMergeNode in="SourceGraphic"/></feMerge>'
        "</filter>"
        "</defs>"
        '<rect width="100%" height="100%" fill="url(#cyberpunk)"/>'
        '<rect x="10%" y="10%" width="80%" height="80%" fill="none" '
        'stroke="#00ffff" stroke-width="1" opacity="0.3"/>'
        '<text x="50%" y="50%" font-family="monospace" font-size="12" '
        f'fill="#00ffff" text-anchor="middle" dy=".3em" filter="url(#glow)">{escape(o.text)}</text>'
        '<circle cx="20%" cy="20%" r="2" fill="#ff00ff" opacity="0.6">'
        '<animate attributeName="opacity" values="0.6;1;0.6" dur="2s" repeatCount="indefinite"/>'
        "</circle>"
        '<circle cx="80%" cy="80%" r="2" fill="#00ff00" opacity="0.6">'
        '<animate attributeName="opacity" values="1;0.6;1" dur="2s" repeatCount="indefinite"/>'
        "</circle>"
        "</svg>"
    )


_MARKUP = {
    PlaceholderVariant.DEFAULT: svg_placeholder_markup,
    PlaceholderVariant.BLURRED: blurred_placeholder_markup,
    PlaceholderVariant.CYBERPUNK: cyberpunk_placeholder_markup,
}


def generate_svg_placeholder(options: PlaceholderOptions | None = None) -> str:
    return _to_data_url(svg_placeholder_markup(options))


def generate_blurred_placeholder(options: PlaceholderOptions | None = None) -> str:
    return _to_data_url(blurred_placeholder_markup(options))


def generate_cyberpunk_placeholder(options: PlaceholderOptions | None = None) -> str:
    return _to_data_url(cyberpunk_placeholder_markup(options))


def placeholder_markup(
    variant: PlaceholderVariant | str = PlaceholderVariant.CYBERPUNK,
    options: PlaceholderOptions | None = None,
) -> str:
    """Return raw SVG markup for ``variant``.

    Raises:
        ValueError: If ``variant`` is not a known variant name.
    """
    return _MARKUP[PlaceholderVariant(variant)](options)


def get_placeholder(
    variant: PlaceholderVariant | str = PlaceholderVariant.CYBERPUNK,
    options: PlaceholderOptions | None = None,
) -> str:
    """Return the data URL placeholder for ``variant``.

    Args:
        variant: One of ``default``, ``blurred`` or ``cyberpunk``.
        options: Size, colors and label; defaults apply when omitted.

    Returns:
        A ``data:image/svg+xml;base64`` URL usable directly as an image source.
    """
    return _to_data_url(placeholder_markup(variant, options))


PLACEHOLDERS: dict[str, str] = {
    "PROFILE": generate_cyberpunk_placeholder(
        PlaceholderOptions(width=320, height=320, text="Profile")
    ),
    "ACHIEVEMENT": generate_cyberpunk_placeholder(
        PlaceholderOptions(width=400, height=300, text="Achievement")
    ),
    "PROJECT": generate_cyberpunk_placeholder(
        PlaceholderOptions(width=600, height=400, text="Project")
    ),
    "GENERIC": generate_cyberpunk_placeholder(
        PlaceholderOptions(width=320, height=240, text="Loading...")
    ),
}
