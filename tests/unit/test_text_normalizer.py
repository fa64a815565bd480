"""Unit tests for text normalization utilities."""

from __future__ import annotations

import pytest

from newsrag.utils.text_normalizer import clean_text, normalize_for_key, text_digest, truncate


class TestCleanText:
    def test_strips_tags(self) -> None:
        assert clean_text("<p>Hello <b>world</b></p>") == "Hello world"

    def test_collapses_whitespace(self) -> None:
        assert clean_text("  a \n\n b\t c  ") == "a b c"

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_empty_values(self, value) -> None:
        assert clean_text(value) == ""


class TestTruncate:
    def test_shorter_text_unchanged(self) -> None:
        assert truncate("abc", 10) == "abc"

    def test_cuts_to_length(self) -> None:
        assert truncate("abcdef", 3) == "abc"

    def test_non_positive_length(self) -> None:
        assert truncate("abc", 0) == ""


class TestKeyNormalization:
    def test_normalize_for_key(self) -> None:
        assert normalize_for_key("  What   happened\ttoday ") == "What happened today"

    def test_digest_ignores_spacing(self) -> None:
        assert text_digest("a  b") == text_digest(" a b ")

    def test_digest_is_case_sensitive(self) -> None:
        assert text_digest("News") != text_digest("news")

    def test_digest_is_hex_sha256(self) -> None:
        digest = text_digest("hello")
        assert len(digest) == 64
        int(digest, 16)
