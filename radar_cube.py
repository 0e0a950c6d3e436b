"""
Radar cube slicing and log compression into a mono16 image.

The cube is a flattened int16 tensor with shape
[sequence, height, rx channels, width]; rows of one rx channel are
`rx_channels * width` apart. One (sequence, rx) slice is shown at a time.
"""
import logging
import math
from dataclasses import dataclass

import numpy as np

from mask_decode import take_or_zero

logger = logging.getLogger(__name__)

REVERSE_HEIGHT = True
# empirical maximum expected amplitude, output must stay bit-compatible
RADAR_MAX_AMPLITUDE = 2500
MONO16_MAX = 65535
LOG_SCALE = MONO16_MAX / RADAR_MAX_AMPLITUDE


@dataclass
class CubeShape:
    seq_count: int
    height: int
    rx_channels: int
    width: int

    @classmethod
    def from_sequence(cls, shape):
        dims = [int(s) for s in list(shape)[:4]]
        dims += [1] * (4 - len(dims))
        return cls(*dims)

    @property
    def stride(self) -> int:
        return self.rx_channels * self.width


def slice_offset(shape: CubeShape, sequence_id: str, rx_index: int):
    """
    Linear offset of the first element of the selected slice.

    "A" is the first sequence, "B" (and the default "") the second one when the
    cube holds more than one. Returns None when there is nothing to show:
    an unknown sequence id or an rx index outside [0, rx_channels).
    """
    if sequence_id == "A":
        offset = 0
    elif sequence_id in ("B", ""):
        offset = shape.height * shape.stride if shape.seq_count > 1 else 0
    else:
        logger.debug("Unknown radar sequence %r", sequence_id)
        return None

    if rx_index < 0 or rx_index >= shape.rx_channels:
        logger.debug("Radar rx %d outside 0..%d", rx_index, shape.rx_channels - 1)
        return None

    return offset + shape.width * rx_index


def slice_indices(shape: CubeShape, offset: int, reverse_height: bool = REVERSE_HEIGHT) -> np.ndarray:
    """
    Cube index of every output pixel, row-major.

    With `reverse_height` the row read for output row r is `height - r`, so the
    first output row reads row `height`, one past the end of the slice.
    """
    i = np.arange(shape.height * shape.width, dtype=np.int64)
    width = max(shape.width, 1)
    rows = i // width
    if reverse_height:
        rows = shape.height - rows
    return offset + rows * shape.stride + i % width


def encode_amplitude(amplitude) -> int:
    """log2(|amplitude| + 1) * 65535/2500, saturated at 65535 and truncated."""
    value = math.log2(abs(amplitude) + 1) * LOG_SCALE
    return int(min(value, MONO16_MAX))


def encode_amplitudes(values) -> np.ndarray:
    """Vectorised `encode_amplitude`, returns uint16."""
    mags = np.abs(np.asarray(values, dtype=np.float64))
    encoded = np.minimum(np.log2(mags + 1) * LOG_SCALE, MONO16_MAX)
    return np.floor(encoded).astype(np.uint16)


def pack_mono16(values) -> bytes:
    """Big-endian byte pairs (high byte first)."""
    return np.asarray(values, dtype=np.uint16).astype(">u2").tobytes()


def slice_cube(cube, shape, sequence_id: str, rx_index: int, reverse_height: bool = REVERSE_HEIGHT):
    """
    Extract and compress one (sequence, rx) slice of a radar cube.

    Args:
        cube (array-like): Flattened int16 amplitudes.
        shape (list[int]): [sequence, height, rx channels, width].
        sequence_id (str): "A", "B" or "" (second sequence if present).
        rx_index (int): Receive channel.
        reverse_height (bool): Flip the slice vertically.

    Returns:
        (CubeShape, np.ndarray): shape and a (height, width) uint16 image,
        all zeros when the selection has no data.
    """
    dims = shape if isinstance(shape, CubeShape) else CubeShape.from_sequence(shape)
    image = np.zeros((dims.height, dims.width), dtype=np.uint16)
    offset = slice_offset(dims, sequence_id, rx_index)
    if offset is None:
        return dims, image

    amplitudes = take_or_zero(np.asarray(cube, dtype=np.int16).ravel(), slice_indices(dims, offset, reverse_height))
    image[:] = encode_amplitudes(amplitudes).reshape(dims.height, dims.width)
    return dims, image
