"""Image format capability detection."""

from typing import Callable

from PIL import features

FormatProbe = Callable[[str], bool]


def supports_format(fmt: str) -> bool:
    """Return True if the imaging runtime can decode ``fmt``.

    Args:
        fmt: Format name, e.g. ``"webp"`` or ``"avif"``.

    Returns:
        False for unknown formats or when the codec was not compiled in.
    """
    return bool(features.check(fmt.lower()))
