"""
Tests for the per-pixel class argmax of mask payloads.
"""
import logging

import numpy as np
import pytest

from mask_decode import (
    binary_masks,
    get_or_zero,
    infer_class_count,
    rasterize,
    render_rgba,
    take_or_zero,
)


class TestBufferAccess:
    """Out-of-range reads are defined as zero."""

    def test_get_or_zero(self):
        buf = bytes([7, 8, 9])
        assert get_or_zero(buf, 1) == 8
        assert get_or_zero(buf, 3) == 0
        assert get_or_zero(buf, -1) == 0

    def test_take_or_zero(self):
        arr = np.array([5, -6, 7], dtype=np.int16)
        out = take_or_zero(arr, np.array([2, 0, 3, -4, 1]))
        assert out.tolist() == [7, 5, 0, 0, -6]
        assert out.dtype == np.int16


class TestClassCount:
    def test_exact_multiple(self):
        assert infer_class_count(32, 4, 4) == 2

    def test_rounds_half_up(self):
        # 40 / 16 = 2.5
        assert infer_class_count(40, 4, 4) == 3

    def test_inexact_length_warns(self, caplog):
        with caplog.at_level(logging.WARNING, logger="mask_decode"):
            assert infer_class_count(33, 4, 4) == 2
        assert "not a multiple" in caplog.text

    def test_empty_mask(self):
        assert infer_class_count(10, 0, 4) == 0


class TestRasterize:
    def test_argmax_and_score(self):
        data = bytes([10, 200, 100, 0, 0, 0])
        raster = rasterize(data, 1, 2)
        assert raster.classes == 3
        assert raster.labels.tolist() == [[1, 0]]
        assert raster.scores.tolist() == [[200, 0]]

    def test_tie_keeps_lowest_class(self):
        raster = rasterize(bytes([5, 9, 9, 4, 4, 1]), 1, 2)
        assert raster.labels.tolist() == [[1, 0]]
        assert raster.scores.tolist() == [[9, 4]]

    def test_never_picks_zero_score_over_positive(self):
        rng = np.random.default_rng(7)
        data = rng.integers(0, 3, size=6 * 5 * 4, dtype=np.uint8)
        raster = rasterize(data.tobytes(), 6, 5)
        scores = data.reshape(30, 4)
        for i, (label, score) in enumerate(zip(raster.labels.ravel(), raster.scores.ravel())):
            assert score == scores[i].max()
            assert label == int(np.argmax(scores[i]))
            if score == 0:
                assert label == 0

    def test_short_payload_reads_zero(self):
        # 2x2 pixels, 7 bytes -> 2 classes, last pixel misses one score
        raster = rasterize(bytes([1, 2, 3, 4, 5, 6, 9]), 2, 2)
        assert raster.classes == 2
        assert raster.labels.tolist() == [[1, 1], [1, 0]]
        assert raster.scores[1, 1] == 9

    def test_no_classes(self):
        raster = rasterize(b"", 2, 3)
        assert raster.classes == 0
        assert raster.labels.shape == (2, 3)
        assert not raster.scores.any()


class TestRender:
    def test_rgba_scaled_by_score(self):
        raster = rasterize(bytes([10, 200, 100, 0, 0, 0]), 1, 2)
        rgba = render_rgba(raster)
        assert rgba.shape == (1, 2, 4)
        assert rgba[0, 0].tolist() == [180, 19, 58, 200]
        # background is fully transparent
        assert rgba[0, 1].tolist() == [0, 0, 0, 0]

    def test_class_outside_palette_is_white(self):
        classes = 25
        scores = np.zeros(classes, dtype=np.uint8)
        scores[24] = 255
        rgba = render_rgba(rasterize(scores.tobytes(), 1, 1))
        assert rgba[0, 0].tolist() == [255, 255, 255, 255]

    def test_binary_masks_skip_background(self):
        data = np.array([[50, 200, 0], [50, 0, 100], [90, 0, 0], [0, 0, 0]], dtype=np.uint8)
        masks = binary_masks(rasterize(data.tobytes(), 2, 2))
        assert sorted(masks) == [1, 2]
        assert masks[1].tolist() == [[255, 0], [0, 0]]
        assert masks[2].tolist() == [[0, 255], [0, 0]]
