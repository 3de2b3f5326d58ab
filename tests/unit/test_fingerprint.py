import re

import pytest

from legal_lens.service.fingerprint import content_hash, generate_document_id, to_base36


class TestContentHash:
    def test_stable_for_same_bytes(self) -> None:
        assert content_hash(b"lease") == content_hash(b"lease")

    def test_is_md5_hex(self) -> None:
        assert content_hash(b"") == "d41d8cd98f00b204e9800998ecf8427e"

    def test_differs_for_different_bytes(self) -> None:
        assert content_hash(b"lease v1") != content_hash(b"lease v2")


class TestDocumentId:
    def test_format(self) -> None:
        assert re.fullmatch(r"doc_[0-9a-z]+_[0-9a-z]{5}", generate_document_id())

    def test_timestamp_is_base36(self) -> None:
        timestamp = generate_document_id(1_700_000_000_000).split("_")[1]
        assert int(timestamp, 36) == 1_700_000_000_000

    def test_base36(self) -> None:
        assert to_base36(0) == "0"
        assert to_base36(35) == "z"
        assert to_base36(36) == "10"

    def test_negative_rejected(self) -> None:
        with pytest.raises(ValueError):
            to_base36(-1)
