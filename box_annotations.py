"""
Detection boxes as image outlines and as 3D wireframes.
"""
from class_palette import TRANSPARENT, str_to_color, uuid_to_color
from edgefirst_msgs import DetectBox2D
from foxglove_types import (
    Color,
    LinePrimitive,
    LineType,
    Point2,
    Point3,
    PointsAnnotation,
    PointsAnnotationType,
    Pose,
    TextAnnotation,
    TextPrimitive,
    Time,
)
from mask_contours import FRAME_HEIGHT, FRAME_WIDTH

BOX_THICKNESS = 9
BOX_FONT_SIZE = 48
WIREFRAME_THICKNESS = 2
BILLBOARD_FONT_SIZE = 12
BILLBOARD_LIFT = 0.2

# 12 edges of the wireframe cube: back face, front face, connectors
WIREFRAME_INDICES = [0, 1, 1, 2, 2, 3, 3, 0, 4, 5, 5, 6, 6, 7, 7, 4, 0, 4, 1, 5, 2, 6, 3, 7]


def box_to_color_label(box: DetectBox2D, label_mode: str) -> tuple[Color, str]:
    """
    Color and caption of a box for the selected label mode.

    Args:
        box (DetectBox2D): Detection.
        label_mode (str): "label", "score", "label-score" or "track".

    Returns:
        (Color, str): label color and text; in track mode a box with a track id
        is colored and captioned by that id instead.
    """
    color = str_to_color(box.label)
    label = box.label
    if label_mode == "label":
        pass
    elif label_mode == "score":
        label = f"{box.score:.2f}"
    elif label_mode == "label-score":
        label = f"{box.label} {box.score:.2f}"
    elif box.track.id:
        label = box.track.id[:8]
        color = uuid_to_color(box.track.id)
    return color, label


def _frame_rect(box: DetectBox2D):
    x = box.center_x * FRAME_WIDTH
    y = box.center_y * FRAME_HEIGHT
    width = box.width * FRAME_WIDTH
    height = box.height * FRAME_HEIGHT
    return x, y, width, height


def box_outline(box: DetectBox2D, color: Color, timestamp: Time) -> PointsAnnotation:
    x, y, width, height = _frame_rect(box)
    return PointsAnnotation(
        timestamp=timestamp,
        type=PointsAnnotationType.LINE_LOOP,
        points=[
            Point2(x - width / 2, y - height / 2),
            Point2(x - width / 2, y + height / 2),
            Point2(x + width / 2, y + height / 2),
            Point2(x + width / 2, y - height / 2),
        ],
        outline_color=color,
        outline_colors=[color] * 4,
        fill_color=TRANSPARENT,
        thickness=BOX_THICKNESS,
    )


def box_text(box: DetectBox2D, color: Color, label: str, timestamp: Time) -> TextAnnotation:
    x, y, width, height = _frame_rect(box)
    return TextAnnotation(
        timestamp=timestamp,
        position=Point2(x - width / 2, y - height / 2 + 6),
        text=label,
        font_size=BOX_FONT_SIZE,
        text_color=color,
        background_color=TRANSPARENT,
    )


def box_wireframe(box: DetectBox2D, color: Color) -> LinePrimitive:
    """
    Cube of side `width` (depth and lateral) by `height`, placed at
    (distance, center_x, center_y).
    """
    w = box.width / 2
    h = box.height / 2
    corners = [
        Point3(-w, -w, -h),
        Point3(-w, +w, -h),
        Point3(-w, +w, +h),
        Point3(-w, -w, +h),
        Point3(+w, -w, -h),
        Point3(+w, +w, -h),
        Point3(+w, +w, +h),
        Point3(+w, -w, +h),
    ]
    return LinePrimitive(
        type=LineType.LINE_LIST,
        pose=Pose(Point3(box.distance, box.center_x, box.center_y)),
        thickness=WIREFRAME_THICKNESS,
        scale_invariant=True,
        points=corners,
        color=color,
        indices=list(WIREFRAME_INDICES),
    )


def box_billboard(box: DetectBox2D, color: Color, label: str) -> TextPrimitive:
    return TextPrimitive(
        pose=Pose(Point3(box.distance, box.center_x, box.center_y + box.height / 2 + BILLBOARD_LIFT)),
        billboard=True,
        font_size=BILLBOARD_FONT_SIZE,
        scale_invariant=True,
        color=color,
        text=label,
    )
