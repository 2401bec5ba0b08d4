"""Property-based tests using hypothesis."""

from __future__ import annotations

from typing import Callable

import msgpack
import pytest
from hypothesis import given
from hypothesis import strategies as st

from pullpack import NumericOverflow, decode_with


class TestIntegerProperties:
    """Integers decode to exactly the value that was encoded."""

    @given(value=st.integers(min_value=0, max_value=2**64 - 1))
    def test_unsigned_minimal_width(self, value: int) -> None:
        assert decode_with(lambda d: d.decode_u64(), msgpack.packb(value)) == value

    @given(value=st.integers(min_value=-(2**63), max_value=2**63 - 1))
    def test_signed_tags(self, pack_signed: Callable[[int], bytes], value: int) -> None:
        assert decode_with(lambda d: d.decode_i64(), pack_signed(value)) == value

    @given(value=st.integers(min_value=-(2**63), max_value=-1))
    def test_negative_from_reference_encoder(self, value: int) -> None:
        assert decode_with(lambda d: d.decode_i64(), msgpack.packb(value)) == value

    @given(value=st.integers(min_value=0, max_value=2**16 - 1))
    def test_narrowing_matches_range(self, value: int) -> None:
        data = msgpack.packb(value)
        if value > 255:
            with pytest.raises(NumericOverflow):
                decode_with(lambda d: d.decode_u8(), data)
        else:
            assert decode_with(lambda d: d.decode_u8(), data) == value


class TestFloatProperties:
    """Floats decode bit-exactly."""

    @given(value=st.floats(allow_nan=False))
    def test_double(self, value: float) -> None:
        assert decode_with(lambda d: d.decode_f64(), msgpack.packb(value)) == value

    @given(value=st.floats(width=32, allow_nan=False))
    def test_single(self, value: float) -> None:
        data = msgpack.packb(value, use_single_float=True)
        assert decode_with(lambda d: d.decode_f32(), data) == value


class TestStringProperties:
    """Strings decode across fixstr, str 16 and str 32 headers."""

    @given(text=st.text(max_size=300))
    def test_text(self, pack_str: Callable[[str], bytes], text: str) -> None:
        assert decode_with(lambda d: d.decode_string(), pack_str(text)) == text


class TestContainerProperties:
    """Containers deliver their elements in wire order."""

    @given(values=st.lists(st.integers(min_value=0, max_value=2**64 - 1), max_size=40))
    def test_sequence(self, values: list[int]) -> None:
        result = decode_with(
            lambda d: d.decode_sequence(
                lambda d, n: [d.decode_sequence_element(i, lambda d: d.decode_u64()) for i in range(n)]
            ),
            msgpack.packb(values),
        )
        assert result == values

    @given(entries=st.dictionaries(st.integers(min_value=0, max_value=1000), st.booleans(), max_size=40))
    def test_map(self, entries: dict[int, bool]) -> None:
        result = decode_with(
            lambda d: d.decode_map(
                lambda d, n: [
                    (
                        d.decode_map_key(i, lambda d: d.decode_u16()),
                        d.decode_map_value(i, lambda d: d.decode_bool()),
                    )
                    for i in range(n)
                ]
            ),
            msgpack.packb(entries),
        )
        assert result == list(entries.items())
