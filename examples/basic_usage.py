#!/usr/bin/env python3
"""Basic usage example for pullpack.

This example demonstrates:
1. Defining a message with Pydantic
2. Decoding MessagePack bytes straight into the message
3. Decoding with a hand-written routine
4. Handling decode errors
"""

from __future__ import annotations

from typing import Optional

from pullpack import BaseMessage, DecodeError, FixedInt, decode, decode_with


# Define a message class
class StatusReport(BaseMessage):
    """Underwater vehicle status report.

    Travels as a 4-entry map header followed by the four field values.
    """

    vehicle_id: int = FixedInt(bits=8)
    depth_m: float
    callsign: str
    note: Optional[str] = None


# 0x84 header, 42, 12.5 as float64, "ALPHA", nil
PAYLOAD = bytes.fromhex("842acb4029000000000000a5414c504841c0")


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("pullpack Basic Usage Example")
    print("=" * 60)
    print()

    print("1. Decoding a status report...")
    print(f"   Hex: {PAYLOAD.hex()}")
    report = decode(StatusReport, PAYLOAD)

    print(f"   Vehicle ID: {report.vehicle_id}")
    print(f"   Depth: {report.depth_m} m")
    print(f"   Callsign: {report.callsign}")
    print(f"   Note: {report.note}")
    print()

    print("2. Decoding a map with a hand-written routine...")
    entries = decode_with(
        lambda d: d.decode_map(
            lambda d, n: [
                (
                    d.decode_map_key(i, lambda d: d.decode_string()),
                    d.decode_map_value(i, lambda d: d.decode_u8()),
                )
                for i in range(n)
            ]
        ),
        b"\x82\xa1a\x01\xa1b\x02",
    )
    for key, value in entries:
        print(f"   {key} = {value}")
    print()

    print("3. Decoding truncated data...")
    try:
        decode(StatusReport, PAYLOAD[:8])
    except DecodeError as e:
        print(f"   {type(e).__name__}: {e}")
    print()

    print("=" * 60)
    print("Example complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
