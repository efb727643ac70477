"""Bech32 encoding helpers for public keys and event ids (NIP-19)."""

from __future__ import annotations

import re

import bech32

_HEX_64 = re.compile(r"^[0-9a-f]{64}$")


def normalize_public_key(value: str) -> str:
    """Return *value* as 64-char lowercase hex.

    Accepts either hex or an ``npub1…`` bech32 string.

    Raises:
        ValueError: If *value* is neither.
    """
    candidate = value.strip().lower()
    if _HEX_64.match(candidate):
        return candidate
    if candidate.startswith("npub1"):
        return decode_bech32("npub", candidate)
    raise ValueError(f"Not a valid public key: {value!r}")


def decode_bech32(expected_hrp: str, value: str) -> str:
    """Decode a bech32 string with prefix *expected_hrp* into 64-char hex."""
    hrp, data = bech32.bech32_decode(value)
    if hrp != expected_hrp or data is None:
        raise ValueError(f"Not a valid {expected_hrp} string: {value!r}")
    raw = bech32.convertbits(data, 5, 8, False)
    if raw is None or len(raw) != 32:
        raise ValueError(f"Not a valid {expected_hrp} string: {value!r}")
    return bytes(raw).hex()


def encode_bech32(hrp: str, hex_value: str) -> str:
    """Encode a 32-byte hex value with the given prefix (``npub``, ``note``)."""
    data = bech32.convertbits(bytes.fromhex(hex_value), 8, 5)
    return bech32.bech32_encode(hrp, data)


def note_id(event_id: str) -> str:
    """``note1…`` form of an event id."""
    return encode_bech32("note", event_id)


def npub(public_key: str) -> str:
    return encode_bech32("npub", public_key)
