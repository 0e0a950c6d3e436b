"""
Per-pixel class argmax over segmentation mask scores.

A mask payload is `height x width x classes` bytes in row-major order, one
score (0..255) per class and pixel. The class count is not transmitted and
is inferred from the payload length.
"""
import logging
from dataclasses import dataclass

import numpy as np

from class_palette import palette_array

logger = logging.getLogger(__name__)


@dataclass
class ClassRaster:
    classes: int
    labels: np.ndarray  # (h, w) argmax class index
    scores: np.ndarray  # (h, w) uint8 score of that class

    @property
    def height(self) -> int:
        return self.labels.shape[0]

    @property
    def width(self) -> int:
        return self.labels.shape[1]


def get_or_zero(buffer, index: int) -> int:
    """Element `index` of `buffer`, 0 when the index falls outside it."""
    if 0 <= index < len(buffer):
        return int(buffer[index])
    return 0


def take_or_zero(array: np.ndarray, indices: np.ndarray) -> np.ndarray:
    """Vectorised `get_or_zero`: gather `indices`, out-of-range positions read as 0."""
    indices = np.asarray(indices, dtype=np.int64)
    out = np.zeros(indices.shape, dtype=array.dtype)
    valid = (indices >= 0) & (indices < array.size)
    out[valid] = array[indices[valid]]
    return out


def infer_class_count(length: int, height: int, width: int) -> int:
    """
    Number of classes in a payload of `length` bytes, rounded half up.

    A length that is not a multiple of `height * width` is only reported, the
    rounded count is still used and trailing pixels read zero scores.
    """
    pixels = height * width
    if pixels <= 0:
        return 0
    classes = int(np.floor(length / pixels + 0.5))
    if length % pixels != 0:
        logger.warning(
            "Mask length %d is not a multiple of %dx%d pixels; assuming %d classes",
            length, height, width, classes,
        )
    return classes


def rasterize(data, height: int, width: int) -> ClassRaster:
    """
    Argmax class and score for every pixel of a decoded mask payload.

    Ties keep the lowest class index, a pixel with only zero scores is class 0.

    Args:
        data (bytes-like): Decoded payload.
        height (int): Mask rows.
        width (int): Mask columns.

    Returns:
        ClassRaster: labels and scores, both (height, width).
    """
    buf = np.frombuffer(data, dtype=np.uint8)
    pixels = height * width
    classes = infer_class_count(buf.size, height, width)
    if classes == 0:
        return ClassRaster(
            0,
            np.zeros((height, width), dtype=np.int32),
            np.zeros((height, width), dtype=np.uint8),
        )

    need = pixels * classes
    scores = np.zeros(need, dtype=np.uint8)
    n = min(need, buf.size)
    scores[:n] = buf[:n]
    scores = scores.reshape(pixels, classes)

    # argmax returns the first maximum
    labels = scores.argmax(axis=1).astype(np.int32)
    best = scores[np.arange(pixels), labels]
    return ClassRaster(classes, labels.reshape(height, width), best.reshape(height, width))


def render_rgba(raster: ClassRaster) -> np.ndarray:
    """
    Color every pixel by its class, scaled by the class score.

    Returns:
        np.ndarray: (h, w, 4) uint8; rgb = palette * score / 255, alpha = palette alpha.
    """
    palette = np.array(palette_array(max(raster.classes, 1)), dtype=np.uint32)
    colors = palette[raster.labels]
    rgba = np.empty(colors.shape, dtype=np.uint8)
    rgba[..., :3] = colors[..., :3] * raster.scores[..., None].astype(np.uint32) // 255
    rgba[..., 3] = colors[..., 3]
    return rgba


def binary_masks(raster: ClassRaster) -> dict[int, np.ndarray]:
    """
    One 0/255 mask per foreground class (1..classes-1); class 0 is background.
    """
    masks = {}
    for class_index in range(1, raster.classes):
        masks[class_index] = (raster.labels == class_index).astype(np.uint8) * 255
    return masks
