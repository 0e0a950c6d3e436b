"""
Contour tracing of per-class masks and projection onto the video frame.
"""
from dataclasses import dataclass

import cv2
import numpy as np

from class_palette import TRANSPARENT, color_for_f
from foxglove_types import ImageAnnotations, Point2, PointsAnnotation, PointsAnnotationType, Time

# The video is assumed to be 1920x1080
FRAME_WIDTH = 1920
FRAME_HEIGHT = 1080
MASK_THICKNESS = 3
SENTINEL_THICKNESS = 5


@dataclass
class Contour:
    points: np.ndarray  # (N, 2) int32, (x=col, y=row)
    is_hole: bool = False


def simplify_boundary(boundary, epsilon=2.0):
    """
    Simplify a boundary using OpenCV's implementation of Ramer-Douglas-Peucker (RDP) algorithm.

    Args:
        boundary (np.ndarray): Array of (x,y) points representing a contour.
        epsilon (float): RDP simplification parameter (higher = more aggressive).

    Returns:
        np.ndarray: Simplified boundary points, (N, 2) int32.
    """
    simp = cv2.approxPolyDP(boundary.reshape(-1, 1, 2).astype(np.int32), epsilon=epsilon, closed=True)
    return simp.reshape(-1, 2)


def trace_contours(mask: np.ndarray, epsilon=None) -> list[Contour]:
    """
    Outer boundaries and holes of every 8-connected blob in a binary mask.

    All blobs are traced in a single `cv2.findContours` pass with the two-level
    RETR_CCOMP hierarchy: top-level contours are outer boundaries, their
    children are holes.

    Args:
        mask (np.ndarray): (h, w) mask, non-zero is foreground.
        epsilon (float): Optional RDP tolerance in pixels; None keeps every vertex
            that CHAIN_APPROX_SIMPLE keeps.

    Returns:
        list[Contour]: empty for an all-background mask.
    """
    img = np.ascontiguousarray(mask, dtype=np.uint8)
    contours, hierarchy = cv2.findContours(img, cv2.RETR_CCOMP, cv2.CHAIN_APPROX_SIMPLE)
    if hierarchy is None:
        return []

    traced = []
    for c, (_next, _prev, _child, parent) in zip(contours, hierarchy[0]):
        points = c.reshape(-1, 2).astype(np.int32)
        if epsilon is not None and len(points) > 2:
            points = simplify_boundary(points, epsilon=epsilon)
        traced.append(Contour(points, is_hole=bool(parent != -1)))
    return traced


def project_points(points, src_width: int, src_height: int,
                   dst_width: int = FRAME_WIDTH, dst_height: int = FRAME_HEIGHT) -> list[Point2]:
    """Map mask pixel coordinates to frame coordinates, sampling pixel centers."""
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    xs = (pts[:, 0] + 0.5) / src_width * dst_width
    ys = (pts[:, 1] + 0.5) / src_height * dst_height
    return [Point2(float(x), float(y)) for x, y in zip(xs, ys)]


def contour_to_annotation(contour: Contour, class_index: int, src_width: int, src_height: int,
                          dst_width: int = FRAME_WIDTH, dst_height: int = FRAME_HEIGHT) -> PointsAnnotation:
    # holes are drawn like outer boundaries
    color = color_for_f(class_index)
    return PointsAnnotation(
        timestamp=Time(),
        type=PointsAnnotationType.LINE_LOOP,
        points=project_points(contour.points, src_width, src_height, dst_width, dst_height),
        outline_color=color,
        fill_color=color,
        thickness=MASK_THICKNESS,
    )


def sentinel_annotation() -> PointsAnnotation:
    """Invisible one-point annotation; the viewer drops annotation sets with no timestamped element."""
    return PointsAnnotation(
        timestamp=Time(),
        type=PointsAnnotationType.LINE_LOOP,
        points=[Point2(0.0, 0.0)],
        outline_color=TRANSPARENT,
        fill_color=TRANSPARENT,
        thickness=SENTINEL_THICKNESS,
    )


def masks_to_annotations(masks: dict, src_width: int, src_height: int, epsilon=None) -> ImageAnnotations:
    """
    Trace every class mask and collect the projected outlines.

    Args:
        masks (dict[int, np.ndarray]): class index -> binary mask (see `mask_decode.binary_masks`).
        src_width (int): Mask width in pixels.
        src_height (int): Mask height in pixels.
        epsilon (float): Optional RDP tolerance forwarded to `trace_contours`.

    Returns:
        ImageAnnotations: one LINE_LOOP per contour, followed by the sentinel.
    """
    annotations = ImageAnnotations()
    for class_index, mask in masks.items():
        for contour in trace_contours(mask, epsilon=epsilon):
            annotations.points.append(contour_to_annotation(contour, class_index, src_width, src_height))
    annotations.points.append(sentinel_annotation())
    return annotations
