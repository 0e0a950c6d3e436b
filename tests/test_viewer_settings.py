"""
Tests for the display options context.
"""
import pytest

from viewer_settings import ViewerSettings


def test_defaults():
    s = ViewerSettings()
    assert (s.box_label, s.radar_seq, s.radar_rx) == ("", "", 0)
    assert s.label_mode == "track"


@pytest.mark.parametrize("value, mode", [
    ("label", "label"),
    ("Score", "score"),
    ("LABEL-SCORE", "label-score"),
    ("track", "track"),
    ("whatever", "track"),
])
def test_label_mode(value, mode):
    assert ViewerSettings(box_label=value).label_mode == mode


def test_update_from_variables():
    s = ViewerSettings().update_from_variables({"box_label": "score", "radar_seq": "A", "radar_rx": "2"})
    assert s.label_mode == "score"
    assert s.radar_seq == "A"
    assert s.radar_rx == 2


def test_missing_variables_reset_to_defaults():
    s = ViewerSettings(box_label="label", radar_seq="A", radar_rx=3)
    s.update_from_variables({})
    assert (s.box_label, s.radar_seq, s.radar_rx) == ("", "", 0)


@pytest.mark.parametrize("rx", ["abc", float("inf"), float("nan"), 1.5, [1]])
def test_invalid_rx_selects_nothing(rx):
    assert ViewerSettings().update_from_variables({"radar_rx": rx}).radar_rx == -1


def test_integral_float_rx():
    assert ViewerSettings().update_from_variables({"radar_rx": 2.0}).radar_rx == 2
