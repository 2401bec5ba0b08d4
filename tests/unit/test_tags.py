"""Unit tests for the tag table."""

from __future__ import annotations

import pytest

from pullpack.codec import tags
from pullpack.codec.tags import Family, classify, describe


class TestClassify:
    """Test tag classification."""

    @pytest.mark.parametrize("tag", [0x00, 0x01, 0x7F])
    def test_positive_fixint(self, tag: int) -> None:
        info = classify(tag)
        assert info.family is Family.UINT
        assert info.payload == tag
        assert info.is_fixed

    @pytest.mark.parametrize(("tag", "value"), [(0xE0, -32), (0xF0, -16), (0xFF, -1)])
    def test_negative_fixint(self, tag: int, value: int) -> None:
        info = classify(tag)
        assert info.family is Family.INT
        assert info.payload == value

    def test_fixed_containers(self) -> None:
        """Test fixmap, fixarray and fixstr lengths come from the low bits."""
        assert classify(0x80) == tags.TagInfo(0x80, Family.MAP, payload=0)
        assert classify(0x8F).payload == 15
        assert classify(0x93) == tags.TagInfo(0x93, Family.ARRAY, payload=3)
        assert classify(0xA0).payload == 0
        assert classify(0xBF) == tags.TagInfo(0xBF, Family.STR, payload=31)

    def test_nil_and_bool(self) -> None:
        assert classify(tags.NIL).family is Family.NIL
        assert classify(tags.FALSE).payload == 0
        assert classify(tags.TRUE).payload == 1
        assert classify(tags.TRUE).family is Family.BOOL

    @pytest.mark.parametrize(
        ("tag", "family", "width"),
        [
            (0xCA, Family.FLOAT, 4),
            (0xCB, Family.FLOAT, 8),
            (0xCC, Family.UINT, 1),
            (0xCD, Family.UINT, 2),
            (0xCE, Family.UINT, 4),
            (0xCF, Family.UINT, 8),
            (0xD0, Family.INT, 1),
            (0xD1, Family.INT, 2),
            (0xD2, Family.INT, 4),
            (0xD3, Family.INT, 8),
            (0xDA, Family.STR, 2),
            (0xDB, Family.STR, 4),
            (0xDC, Family.ARRAY, 2),
            (0xDD, Family.ARRAY, 4),
            (0xDE, Family.MAP, 2),
            (0xDF, Family.MAP, 4),
        ],
    )
    def test_extended(self, tag: int, family: Family, width: int) -> None:
        info = classify(tag)
        assert info.family is family
        assert info.width == width
        assert info.payload is None
        assert not info.is_fixed

    @pytest.mark.parametrize("tag", [0xC1, 0xC4, 0xC7, 0xC9, 0xD4, 0xD8, 0xD9])
    def test_reserved(self, tag: int) -> None:
        """Test tags outside the table are reserved."""
        assert classify(tag).family is Family.RESERVED

    def test_every_byte_classified(self) -> None:
        for tag in range(256):
            assert classify(tag).tag == tag


class TestDescribe:
    """Test human readable tag descriptions."""

    def test_describe(self) -> None:
        assert describe(0xC0) == "0xc0 (nil)"
        assert describe(0x05) == "0x05 (unsigned integer)"
        assert describe(0xC1) == "0xc1 (reserved)"
