"""
Colors for segmentation classes, detection labels and track ids.
"""
from foxglove_types import Color

WHITE = Color(1.0, 1.0, 1.0, 1.0)
WHITE_I8 = Color(255, 255, 255, 255)
TRANSPARENT = Color(1.0, 1.0, 1.0, 0.0)

# color list from https://sashamaps.net/docs/resources/20-colors/
# index 0 is the background class
CLASS_COLORS_I8 = [
    Color(0, 0, 0, 0),
    Color(230, 25, 75, 200),
    Color(60, 180, 75, 200),
    Color(255, 225, 25, 200),
    Color(0, 130, 200, 200),
    Color(245, 130, 48, 200),
    Color(145, 30, 180, 200),
    Color(70, 240, 240, 200),
    Color(240, 50, 230, 200),
    Color(210, 245, 60, 200),
    Color(250, 190, 212, 200),
    Color(0, 128, 128, 200),
    Color(220, 190, 255, 200),
    Color(170, 110, 40, 200),
    Color(255, 250, 200, 200),
    Color(128, 0, 0, 200),
    Color(170, 255, 195, 200),
    Color(128, 128, 0, 200),
    Color(255, 215, 180, 200),
    Color(0, 0, 128, 200),
    Color(128, 128, 128, 200),
]

COLOR_I_TO_F = 1.0 / 255.0
CLASS_COLORS_F = [
    Color(c.r * COLOR_I_TO_F, c.g * COLOR_I_TO_F, c.b * COLOR_I_TO_F, c.a * COLOR_I_TO_F)
    for c in CLASS_COLORS_I8
]


def color_for(class_index: int) -> Color:
    """8-bit palette color of a class; opaque white outside the palette."""
    if 0 <= class_index < len(CLASS_COLORS_I8):
        return CLASS_COLORS_I8[class_index]
    return WHITE_I8


def color_for_f(class_index: int) -> Color:
    """Same as `color_for` with channels in 0..1."""
    if 0 <= class_index < len(CLASS_COLORS_F):
        return CLASS_COLORS_F[class_index]
    return WHITE


def palette_array(classes: int):
    """(classes, 4) list of RGBA rows, white-padded past the palette."""
    return [color_for(i).as_tuple() for i in range(classes)]


_U32 = 0xFFFFFFFF


def _imul(a: int, b: int) -> int:
    return (a * b) & _U32


def cyrb53(text: str, seed: int = 0) -> int:
    """53-bit string hash (cyrb53), kept bit-compatible with the JavaScript one."""
    h1 = (0xDEADBEEF ^ seed) & _U32
    h2 = (0x41C6CE57 ^ seed) & _U32
    for ch in text:
        c = ord(ch)
        h1 = _imul(h1 ^ c, 2654435761)
        h2 = _imul(h2 ^ c, 1597334677)
    h1 = _imul(h1 ^ (h1 >> 16), 2246822507)
    h1 ^= _imul(h2 ^ (h2 >> 13), 3266489909)
    h2 = _imul(h2 ^ (h2 >> 16), 2246822507)
    h2 ^= _imul(h1 ^ (h1 >> 13), 3266489909)
    return 4294967296 * (2097151 & h2) + h1


def str_to_color(text: str) -> Color:
    """Stable color for a detection label."""
    h = cyrb53(text)
    # blue divides by 0xff00000 and stays below 1/16
    return Color(
        (h & 0xFF) / 0xFF,
        (h & 0xFF00) / 0xFF00,
        (h & 0xFF0000) / 0xFF00000,
        1.0,
    )


def uuid_to_color(uuid: str) -> Color:
    """Color from the first 8 hex digits of a track uuid ('-' and '.' skipped)."""
    hexcode = 0
    digits = 0
    for ch in uuid:
        if ch in "-.":
            continue
        c = ord(ch)
        if c >= ord("a"):
            val = c - ord("a") + 10
        elif c >= ord("A"):
            val = c - ord("A") + 10
        elif c >= ord("0"):
            val = c - ord("0")
        else:
            val = 0
        hexcode = ((hexcode << 4) + val) & _U32
        digits += 1
        if digits >= 8:
            break

    return Color(
        ((hexcode >> 24) & 0xFF) / 255.0,
        ((hexcode >> 16) & 0xFF) / 255.0,
        ((hexcode >> 8) & 0xFF) / 255.0,
        1.0,
    )
