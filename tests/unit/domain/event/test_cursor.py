"""Unit tests for CursorCodec."""

import pytest

from eventlog.domain.event.cursor import START, CursorCodec
from eventlog.domain.event.model import MAX_EVENT_ID
from eventlog.domain.shared.error import InvalidCursorError


class TestCursorDecode:
    @pytest.fixture
    def codec(self) -> CursorCodec:
        return CursorCodec()

    def test_none_means_start(self, codec: CursorCodec):
        assert codec.decode(None) is None

    def test_empty_means_start(self, codec: CursorCodec):
        assert codec.decode("") is None

    def test_decodes_last_seen_id(self, codec: CursorCodec):
        assert codec.decode("42") == 42

    def test_leading_zeros_are_accepted(self, codec: CursorCodec):
        assert codec.decode("007") == 7

    @pytest.mark.parametrize("token", ["abc", "1.5", "-1", "+3", " 4", "4 ", "1e3", "0x10", "²"])
    def test_malformed_token_is_rejected(self, codec: CursorCodec, token: str):
        with pytest.raises(InvalidCursorError) as exc_info:
            codec.decode(token)
        assert exc_info.value.cursor == token
        assert exc_info.value.code == "INVALID_CURSOR"

    @pytest.mark.parametrize("token", [str(2**63), "9" * 30, "1" * 5000])
    def test_token_beyond_id_range_is_rejected(self, codec: CursorCodec, token: str):
        with pytest.raises(InvalidCursorError):
            codec.decode(token)

    def test_largest_id_is_accepted(self, codec: CursorCodec):
        assert codec.decode("0" * 30 + str(MAX_EVENT_ID)) == MAX_EVENT_ID


class TestCursorEncode:
    @pytest.fixture
    def codec(self) -> CursorCodec:
        return CursorCodec()

    def test_none_encodes_to_start_token(self, codec: CursorCodec):
        assert codec.encode(None) == START

    def test_encodes_id(self, codec: CursorCodec):
        assert codec.encode(15) == "15"

    def test_negative_id_is_rejected(self, codec: CursorCodec):
        with pytest.raises(ValueError):
            codec.encode(-1)

    @pytest.mark.parametrize("position", [None, 0, 1, 10, 2**31, 2**63 - 1])
    def test_decode_inverts_encode(self, codec: CursorCodec, position: int | None):
        assert codec.decode(codec.encode(position)) == position
