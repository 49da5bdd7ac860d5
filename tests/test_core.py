"""
Unit Tests for crypt_keeper Utilities
=====================================
Tests for codec, random source and keyed hashing.
"""

import base64
import re

import pytest


HEX_RE = re.compile(r"^[a-f0-9]+$")


class TestBase64Encode:
    """Tests for base64_encode."""

    @pytest.mark.asyncio
    async def test_rejects_missing_value(self):
        """Should reject a missing value."""
        from crypt_keeper import base64_encode, InvalidArgument

        with pytest.raises(InvalidArgument) as exc:
            await base64_encode(None)

        assert exc.value.argument == "value"

    @pytest.mark.asyncio
    async def test_encodes_string(self):
        """Should encode a string to the expected value."""
        from crypt_keeper import base64_encode

        assert await base64_encode("Hello world") == "SGVsbG8gd29ybGQ="

    @pytest.mark.asyncio
    async def test_encodes_bytes_as_is(self):
        """Should encode raw bytes without conversion."""
        from crypt_keeper import base64_encode

        assert await base64_encode(b"\x00\xff\x10") == "AP8Q"

    @pytest.mark.asyncio
    async def test_encodes_number(self):
        """Should serialize non-string values first."""
        from crypt_keeper import base64_encode

        assert await base64_encode(156) == "MTU2"

    @pytest.mark.asyncio
    async def test_encodes_object(self):
        """Should JSON-serialize objects before encoding."""
        from crypt_keeper import base64_encode, base64_decode

        encoded = await base64_encode({"foo": "bar"})

        assert await base64_decode(encoded) == '{"foo": "bar"}'

    @pytest.mark.asyncio
    async def test_rejects_unserializable(self):
        """Should reject values JSON can't render."""
        from crypt_keeper import base64_encode, InvalidArgument

        with pytest.raises(InvalidArgument):
            await base64_encode(object())


class TestBase64Decode:
    """Tests for base64_decode."""

    @pytest.mark.asyncio
    async def test_rejects_missing_value(self):
        """Should reject a missing value."""
        from crypt_keeper import base64_decode, InvalidArgument

        with pytest.raises(InvalidArgument):
            await base64_decode(None)

    @pytest.mark.asyncio
    async def test_rejects_non_string(self):
        """Should reject non-string input."""
        from crypt_keeper import base64_decode, InvalidArgument

        with pytest.raises(InvalidArgument):
            await base64_decode({"foo": "bar"})

    @pytest.mark.asyncio
    async def test_rejects_bad_padding(self):
        """Should reject input that isn't base64."""
        from crypt_keeper import base64_decode, InvalidArgument

        with pytest.raises(InvalidArgument):
            await base64_decode("abc")

    @pytest.mark.asyncio
    async def test_decodes_value(self):
        """Should decode to the original text."""
        from crypt_keeper import base64_decode

        assert await base64_decode("SGVsbG8gd29ybGQ=") == "Hello world"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["foo:bar", "a", "naïve café ☕", "line\nbreak"])
    async def test_round_trip_text(self, text):
        """decode(encode(s)) should return s for text."""
        from crypt_keeper import base64_encode, base64_decode

        assert await base64_decode(await base64_encode(text)) == text


class TestRandomSource:
    """Tests for random bytes, strings and numbers."""

    def test_random_bytes_length(self):
        """Should return the requested number of bytes."""
        from crypt_keeper import random_bytes

        assert len(random_bytes(32)) == 32

    @pytest.mark.parametrize("bad", [None, 0, -4, 1.5, True])
    def test_random_bytes_rejects_bad_count(self, bad):
        """Should reject missing, zero, negative or non-integer counts."""
        from crypt_keeper import random_bytes, InvalidArgument

        with pytest.raises(InvalidArgument):
            random_bytes(bad)

    @pytest.mark.asyncio
    async def test_random_hex_rejects_missing(self):
        """Should reject a missing byte count."""
        from crypt_keeper import random_hex, InvalidArgument

        with pytest.raises(InvalidArgument):
            await random_hex(None)

    @pytest.mark.asyncio
    async def test_random_hex_pattern(self):
        """Should return 2*n lowercase hex characters."""
        from crypt_keeper import random_hex

        for n in (1, 16, 33):
            value = await random_hex(n)
            assert len(value) == 2 * n
            assert HEX_RE.match(value)

    @pytest.mark.asyncio
    async def test_random_base64_rejects_missing(self):
        """Should reject a missing byte count."""
        from crypt_keeper import random_base64, InvalidArgument

        with pytest.raises(InvalidArgument):
            await random_base64(None)

    @pytest.mark.asyncio
    async def test_random_base64_decodes_to_n_bytes(self):
        """Should decode to exactly n bytes."""
        from crypt_keeper import random_base64

        for n in (1, 2, 3, 16, 64):
            assert len(base64.b64decode(await random_base64(n))) == n

    @pytest.mark.asyncio
    async def test_uuid_is_rfc4122_v4(self):
        """Should fix the version and variant nibbles."""
        from crypt_keeper import generate_v4_uuid

        pattern = re.compile(
            r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$"
        )
        for _ in range(50):
            value = await generate_v4_uuid()
            assert len(value) == 36
            assert pattern.match(value)

    @pytest.mark.asyncio
    async def test_uuid_unique(self):
        """Should not repeat."""
        from crypt_keeper import generate_v4_uuid

        values = {await generate_v4_uuid() for _ in range(100)}

        assert len(values) == 100

    @pytest.mark.asyncio
    async def test_random_number_no_args(self):
        """Should return a float in [0, 1]."""
        from crypt_keeper import random_number

        value = await random_number()

        assert isinstance(value, float)
        assert 0 <= value <= 1

    @pytest.mark.asyncio
    async def test_random_number_one_arg(self):
        """Should return an integer in [0, a]."""
        from crypt_keeper import random_number

        for _ in range(200):
            value = await random_number(10)
            assert isinstance(value, int)
            assert 0 <= value <= 10

    @pytest.mark.asyncio
    async def test_random_number_two_args(self):
        """Should stay within [10, 20] inclusive."""
        from crypt_keeper import random_number

        seen = set()
        for _ in range(1000):
            value = await random_number(10, 20)
            assert isinstance(value, int)
            assert 10 <= value <= 20
            seen.add(value)

        assert seen == set(range(10, 21))

    @pytest.mark.asyncio
    async def test_random_number_swapped_bounds(self):
        """Should accept bounds in either order."""
        from crypt_keeper import random_number

        for _ in range(100):
            assert 10 <= await random_number(20, 10) <= 20
            assert -5 <= await random_number(-5) <= 0

        assert await random_number(7, 7) == 7

    @pytest.mark.asyncio
    async def test_random_number_rejects_non_int(self):
        """Should reject non-integer bounds."""
        from crypt_keeper import random_number, InvalidArgument

        with pytest.raises(InvalidArgument):
            await random_number("10")


class TestKeyedHashing:
    """Tests for HMAC digests (RFC 2202 / RFC 4231 test case 2)."""

    KEY = "Jefe"
    DATA = "what do ya want for nothing?"

    @pytest.mark.asyncio
    async def test_hmac_md5_vector(self):
        """Should match the RFC 2202 MD5 vector."""
        from crypt_keeper import hmac_md5

        assert await hmac_md5(self.KEY, self.DATA) == "750c783e6ab0b503eaa86e310a5db738"

    @pytest.mark.asyncio
    async def test_hmac_sha1_vector(self):
        """Should match the RFC 2202 SHA-1 vector."""
        from crypt_keeper import hmac_sha1

        assert await hmac_sha1(self.KEY, self.DATA) == "effcdf6ae5eb2fa2d27416d5f184df9c259a7c79"

    @pytest.mark.asyncio
    async def test_hmac_sha256_vector(self):
        """Should match the RFC 4231 SHA-256 vector."""
        from crypt_keeper import hmac_sha256

        assert await hmac_sha256(self.KEY, self.DATA) == (
            "5bdcc146bf60754e6a042426089575c75a003f089d2739839dec58b964ec3843"
        )

    @pytest.mark.asyncio
    async def test_deterministic_and_distinct(self):
        """Same inputs give the same digest; algorithms differ."""
        from crypt_keeper import hmac_md5, hmac_sha1, hmac_sha256

        first = await hmac_sha256("somekey", "someval")
        second = await hmac_sha256("somekey", "someval")

        assert first == second
        assert first != await hmac_md5("somekey", "someval")
        assert first != await hmac_sha1("somekey", "someval")

    @pytest.mark.asyncio
    async def test_base64_encoding(self):
        """Should honour the output encoding."""
        from crypt_keeper import hmac_md5

        value = await hmac_md5("somekey", "someval", "base64")

        assert not HEX_RE.match(value)
        assert len(base64.b64decode(value)) == 16

    @pytest.mark.asyncio
    async def test_serializes_non_string_value(self):
        """Should JSON-serialize non-string values."""
        from crypt_keeper import hmac_sha256

        assert await hmac_sha256("k", {"a": 1}) == await hmac_sha256("k", '{"a": 1}')

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name", ["hmac_md5", "hmac_sha1", "hmac_sha256"])
    async def test_rejects_missing_key(self, name):
        """Should reject a missing key."""
        import crypt_keeper

        with pytest.raises(crypt_keeper.InvalidArgument) as exc:
            await getattr(crypt_keeper, name)(None, "someval")

        assert exc.value.argument == "key"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name", ["hmac_md5", "hmac_sha1", "hmac_sha256"])
    async def test_rejects_missing_value(self, name):
        """Should reject a missing value."""
        import crypt_keeper

        with pytest.raises(crypt_keeper.InvalidArgument) as exc:
            await getattr(crypt_keeper, name)("somekey", None)

        assert exc.value.argument == "value"

    @pytest.mark.asyncio
    async def test_rejects_unknown_encoding(self):
        """Should reject unsupported output encodings."""
        from crypt_keeper import hmac_sha256, InvalidArgument

        with pytest.raises(InvalidArgument):
            await hmac_sha256("somekey", "someval", "base32")

    @pytest.mark.asyncio
    async def test_hmac_verify(self):
        """Should compare digests in constant time."""
        from crypt_keeper import hmac_sha256, hmac_verify

        digest = await hmac_sha256("somekey", "someval")

        assert await hmac_verify("sha256", "somekey", "someval", digest) is True
        assert await hmac_verify("sha256", "somekey", "otherval", digest) is False
        assert await hmac_verify("sha256", "otherkey", "someval", digest) is False

    @pytest.mark.asyncio
    async def test_hmac_verify_rejects_unknown_algorithm(self):
        """Should reject algorithms outside md5/sha1/sha256."""
        from crypt_keeper import hmac_verify, InvalidArgument

        with pytest.raises(InvalidArgument):
            await hmac_verify("sha512", "somekey", "someval", "00")
