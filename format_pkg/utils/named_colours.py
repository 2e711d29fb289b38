"""Lookup of named colours (CSS4/X11 names) to RGB triples."""

from typing import Optional, Tuple

from matplotlib.colors import CSS4_COLORS, to_rgb

__all__ = [
    'named_colour',
]


def named_colour(name) -> Optional[Tuple[int, int, int]]:
    """
    Resolve a colour name to an RGB triple.

    Matching ignores case and embedded spaces, so 'Dark Green' and
    'darkgreen' are the same colour. Unknown names return None.
    """
    if not isinstance(name, str):
        return None
    hex_code = CSS4_COLORS.get(name.replace(' ', '').lower())
    if hex_code is None:
        return None
    return tuple(int(round(channel * 255)) for channel in to_rgb(hex_code))
