import logging

import numpy as np
import pytest
from PIL import Image

from color_source import (
    WHITE,
    ConstantColor,
    ImageSampledColor,
    color_source_for,
    resolve_color,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("fff", (255, 255, 255)),
        ("#f00", (255, 0, 0)),
        ("00ff00", (0, 255, 0)),
        ("#0000ff", (0, 0, 255)),
        ("#1a2B3c", (0x1A, 0x2B, 0x3C)),
        ("abc", (0xAA, 0xBB, 0xCC)),
    ],
)
def test_resolve_color_valid(value, expected, caplog):
    with caplog.at_level(logging.INFO):
        assert resolve_color(value) == expected
    assert not [r for r in caplog.records if r.levelno >= logging.WARNING]


def test_resolve_color_none_is_info(caplog):
    with caplog.at_level(logging.INFO):
        assert resolve_color(None) == WHITE
    assert [r.levelno for r in caplog.records] == [logging.INFO]


def test_resolve_color_empty_warns(caplog):
    with caplog.at_level(logging.INFO):
        assert resolve_color("") == WHITE
    assert caplog.records[-1].levelno == logging.WARNING
    assert "no color provided" in caplog.text


def test_resolve_color_illegal_character(caplog):
    with caplog.at_level(logging.WARNING):
        assert resolve_color("zzzzzz") == WHITE
    assert "illegal character" in caplog.text.lower()


@pytest.mark.parametrize("value", ["12", "#12", "1234", "1234567", "#"])
def test_resolve_color_invalid_length(value, caplog):
    with caplog.at_level(logging.WARNING):
        assert resolve_color(value) == WHITE
    text = caplog.text.lower()
    assert "invalid" in text and "length" in text


@pytest.mark.parametrize("value", ["+fffff", "f_ffff", " fffff", "ff ff0"])
def test_resolve_color_rejects_what_int_would_accept(value, caplog):
    with caplog.at_level(logging.WARNING):
        assert resolve_color(value) == WHITE
    assert "illegal character" in caplog.text.lower()


def test_constant_color():
    src = ConstantColor((1, 2, 3))
    assert src.color_at(0, 0) == (1, 2, 3)
    assert src.color_at(999, 5) == (1, 2, 3)


def test_image_sampled_color_reads_x_y():
    pixels = np.zeros((2, 3, 3), dtype=np.uint8)
    pixels[1, 2] = (10, 20, 30)
    src = ImageSampledColor(pixels)
    assert src.size == (3, 2)
    assert src.color_at(2, 1) == (10, 20, 30)
    assert src.color_at(0, 0) == (0, 0, 0)
    assert all(type(c) is int for c in src.color_at(2, 1))


def test_image_sampled_color_from_pil():
    img = Image.new("RGB", (4, 4), color=(7, 8, 9))
    assert ImageSampledColor(img).color_at(3, 3) == (7, 8, 9)


def test_image_sampled_color_rejects_bad_shape():
    with pytest.raises(ValueError):
        ImageSampledColor(np.zeros((4, 4), dtype=np.uint8))


def test_color_source_for_prefers_image(caplog):
    img = Image.new("RGB", (2, 2), color=(5, 6, 7))
    with caplog.at_level(logging.INFO):
        src = color_source_for(color="#f00", image=img)
    assert isinstance(src, ImageSampledColor)
    assert src.color_at(1, 1) == (5, 6, 7)
    assert "Ignoring color" in caplog.text


def test_color_source_for_hex():
    src = color_source_for(color="#f00")
    assert isinstance(src, ConstantColor)
    assert src.color_at(0, 0) == (255, 0, 0)
