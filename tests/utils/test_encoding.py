import asyncio
import base64
import logging
import pytest

from gemini_relay.utils.encoding import EncodedPayload, encode_file, encode_file_async, resolve_mime_type


class TestResolveMimeType:

    @pytest.mark.parametrize("path,expected", [
        ("photo.jpg", "image/jpeg"),
        ("photo.JPEG", "image/jpeg"),
        ("photo.png", "image/png"),
        ("anim.Gif", "image/gif"),
        ("photo.WEBP", "image/webp"),
        ("/tmp/uploads/upload-abc.webp", "image/webp"),
    ])
    def test_known_extensions(self, path, expected, caplog):
        with caplog.at_level(logging.WARNING):
            assert resolve_mime_type(path) == expected
        assert caplog.records == []

    @pytest.mark.parametrize("path", ["file.xyz", "noextension", "archive.tar.gz"])
    def test_unknown_extension_falls_back_to_jpeg(self, path, caplog):
        """
        Test: Unrecognized extension
        How: Resolve a path with an extension outside the image table
        Ensures: image/jpeg is returned and a warning is logged, never an error
        """
        with caplog.at_level(logging.WARNING, logger="gemini_relay.utils.encoding"):
            assert resolve_mime_type(path) == "image/jpeg"

        assert len(caplog.records) == 1
        assert caplog.records[0].levelno == logging.WARNING

    def test_explicit_type_returned_unchanged(self, caplog):
        assert resolve_mime_type("file.xyz", "image/heic") == "image/heic"
        assert resolve_mime_type("photo.png", "image/jpeg") == "image/jpeg"
        assert caplog.records == []


class TestEncodeFile:

    def test_round_trip(self, tmp_path):
        """
        Test: Encoding round-trip
        How: Encode every byte value, decode the base64 payload
        Ensures: The original bytes come back exactly
        """
        raw = bytes(range(256)) * 3
        path = tmp_path / "blob.bin"
        path.write_bytes(raw)

        payload = encode_file(path, "application/octet-stream")

        assert payload.mime_type == "application/octet-stream"
        assert base64.b64decode(payload.data) == raw
        assert payload.to_bytes() == raw

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.png"
        path.write_bytes(b"")

        assert encode_file(path, "image/png") == EncodedPayload(mime_type="image/png", data="")

    def test_missing_file_raises_oserror(self, tmp_path):
        with pytest.raises(OSError):
            encode_file(tmp_path / "gone.jpg", "image/jpeg")

    def test_async_variant_matches(self, tmp_path, jpeg_bytes):
        path = tmp_path / "photo.jpg"
        path.write_bytes(jpeg_bytes)

        assert asyncio.run(encode_file_async(path, "image/jpeg")) == encode_file(path, "image/jpeg")

    def test_payload_is_immutable(self):
        payload = EncodedPayload(mime_type="image/png", data="AAAA")

        with pytest.raises(AttributeError):
            payload.mime_type = "image/gif"

    def test_repr_hides_data(self):
        payload = EncodedPayload(mime_type="image/png", data="A" * 1000)

        assert "AAAA" not in repr(payload)
        assert "1000" in repr(payload)
