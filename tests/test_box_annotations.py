"""
Tests for detection box geometry and captions.
"""
import pytest

from box_annotations import (
    WIREFRAME_INDICES,
    box_billboard,
    box_outline,
    box_to_color_label,
    box_wireframe,
)
from class_palette import TRANSPARENT, str_to_color, uuid_to_color
from edgefirst_msgs import DetectBox2D, DetectTrack
from foxglove_types import Time, to_dict

BOX = DetectBox2D(
    center_x=0.5, center_y=0.25, width=0.2, height=0.4,
    label="person", score=0.456, distance=2.0,
    track=DetectTrack(id="0a0b0c0d-0000"),
)


@pytest.mark.parametrize("mode, text", [
    ("label", "person"),
    ("score", "0.46"),
    ("label-score", "person 0.46"),
])
def test_label_modes_use_label_color(mode, text):
    color, label = box_to_color_label(BOX, mode)
    assert label == text
    assert color == str_to_color("person")


def test_track_mode():
    color, label = box_to_color_label(BOX, "track")
    assert label == "0a0b0c0d"
    assert color == uuid_to_color("0a0b0c0d-0000")


def test_outline_corners():
    ann = box_outline(BOX, str_to_color("person"), Time(2, 0))
    xs = sorted({p.x for p in ann.points})
    ys = sorted({p.y for p in ann.points})
    assert xs == pytest.approx([768.0, 1152.0])
    assert ys == pytest.approx([54.0, 486.0])
    assert ann.fill_color == TRANSPARENT
    assert len(ann.outline_colors) == 4


def test_wireframe():
    line = box_wireframe(BOX, TRANSPARENT)
    assert len(line.points) == 8
    assert line.indices == WIREFRAME_INDICES
    assert max(line.indices) == 7
    pos = line.pose.position
    assert (pos.x, pos.y, pos.z) == (2.0, 0.5, 0.25)
    assert all(abs(p.z) == pytest.approx(0.2) for p in line.points)


def test_billboard_above_box():
    text = box_billboard(BOX, TRANSPARENT, "person")
    assert text.pose.position.z == pytest.approx(0.25 + 0.2 + 0.2)
    assert text.billboard is True


def test_to_dict_plain_enums():
    d = to_dict(box_wireframe(BOX, TRANSPARENT))
    assert d["type"] == 2
    assert d["pose"]["orientation"]["w"] == 1.0
