"""
Unit tests for the transport byte codec.

Covers:
- Every byte value survives encode/decode unchanged
- Rejection of values outside [0, 255]
- Binary strings and text-frame payloads
"""

import pytest

from mudclient.src.network.codec import decode, encode


class TestEncode:
    """Tests for outbound message encoding."""

    def test_all_byte_values_round_trip(self):
        """All 256 values come back in order, one octet each."""
        values = list(range(256))

        payload = encode(values)

        assert len(payload) == 256
        assert list(decode(payload)) == values

    def test_bytes_pass_through(self):
        assert encode(b"\x00\xff\r\n") == b"\x00\xff\r\n"
        assert encode(bytearray(b"abc")) == b"abc"
        assert encode(memoryview(b"xyz")) == b"xyz"

    def test_empty_input(self):
        assert encode([]) == b""
        assert encode("") == b""

    def test_binary_string_maps_code_points_to_octets(self):
        """A str is treated as one code point per byte."""
        assert encode("look\xff\xf9") == b"look\xff\xf9"

    def test_string_with_wide_character_rejected(self):
        with pytest.raises(ValueError) as exc_info:
            encode("caf€")
        assert "index 3" in str(exc_info.value)

    @pytest.mark.parametrize("bad", [256, -1, 1000])
    def test_out_of_range_values_rejected(self, bad):
        with pytest.raises(ValueError) as exc_info:
            encode([65, bad, 66])
        assert "index 1" in str(exc_info.value)

    def test_non_integer_values_rejected(self):
        with pytest.raises(ValueError):
            encode([65, "B"])


class TestDecode:
    """Tests for inbound message decoding."""

    def test_binary_message_verbatim(self):
        assert decode(b"\x1b[0m\xff\xfb\x01") == b"\x1b[0m\xff\xfb\x01"

    def test_text_message_surfaces_utf8_octets(self):
        """Text frames yield the octets they travelled as."""
        assert decode("hé") == b"h\xc3\xa9"

    def test_decode_returns_bytes(self):
        assert isinstance(decode(bytearray(b"ok")), bytes)
