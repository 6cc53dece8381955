"""Tests for language detection and line-level selective translation."""

from __future__ import annotations

import asyncio

import pytest

from design_translator.core.language import ENGLISH, KOREAN, is_korean, target_language
from design_translator.core.models import TranslatedLine
from design_translator.core.translate import (
    EMPTY_TEXT_NOTICE,
    contains_reserved_keyword,
    is_numeric_line,
    translate_lines,
    translate_text,
)

from tests.conftest import FakeTranslator


# ---------------------------------------------------------------------------
# Tests: language detection
# ---------------------------------------------------------------------------


class TestLanguageDetection:
    def test_hangul_syllables(self):
        assert is_korean("로고") is True

    def test_compatibility_jamo(self):
        assert is_korean("ㅋㅋ") is True

    def test_hangul_jamo(self):
        assert is_korean("ᄀ") is True

    def test_mixed_text_counts_as_korean(self):
        assert is_korean("Falcons 로고") is True

    def test_english(self):
        assert is_korean("hello, how are you") is False

    def test_other_scripts(self):
        assert is_korean("こんにちは 你好") is False

    def test_target_language(self):
        assert target_language("로고를 더 크게") == ENGLISH
        assert target_language("make it bigger") == KOREAN
        assert target_language("") == KOREAN


# ---------------------------------------------------------------------------
# Tests: helpers
# ---------------------------------------------------------------------------


class TestHelpers:
    @pytest.mark.parametrize("line", ["1", "95", " 100 ", "007"])
    def test_numeric(self, line):
        assert is_numeric_line(line) is True

    @pytest.mark.parametrize("line", ["", "1.5", "10개", "size 95", "-3"])
    def test_not_numeric(self, line):
        assert is_numeric_line(line) is False

    def test_reserved_keyword_substring(self):
        assert contains_reserved_keyword("긴급: 금요일까지", ("긴급",)) is True

    def test_reserved_keyword_case_sensitive(self):
        assert contains_reserved_keyword("urgent please", ("URGENT",)) is False

    def test_empty_keyword_ignored(self):
        assert contains_reserved_keyword("anything", ("",)) is False


# ---------------------------------------------------------------------------
# Tests: translate_text
# ---------------------------------------------------------------------------


class TestTranslateText:
    def test_empty_text_short_circuits(self):
        translator = FakeTranslator()
        assert asyncio.run(translate_text("", ENGLISH, translator)) == EMPTY_TEXT_NOTICE
        assert asyncio.run(translate_text("  \n ", ENGLISH, translator)) == EMPTY_TEXT_NOTICE
        assert translator.calls == []

    def test_translates_through_backend(self):
        translator = FakeTranslator()
        result = asyncio.run(translate_text("로고를 더 크게", ENGLISH, translator))
        assert result == "Make the logo bigger"
        assert translator.calls == [("로고를 더 크게", ENGLISH)]

    def test_backend_error_propagates(self):
        translator = FakeTranslator(error=RuntimeError("backend down"))
        with pytest.raises(RuntimeError, match="backend down"):
            asyncio.run(translate_text("로고", ENGLISH, translator))


# ---------------------------------------------------------------------------
# Tests: translate_lines
# ---------------------------------------------------------------------------


class TestTranslateLines:
    def test_numeric_lines_never_sent(self):
        translator = FakeTranslator()
        result = asyncio.run(translate_lines(["1", " 95 ", "로고를 더 크게"], ENGLISH, translator))
        assert [line.text for line in result] == ["1", " 95 ", "Make the logo bigger"]
        assert not any(line.reserved for line in result)
        assert [text for text, _ in translator.calls] == ["로고를 더 크게"]

    def test_reserved_keyword_lines_pass_through(self):
        translator = FakeTranslator()
        result = asyncio.run(
            translate_lines(["긴급 금요일 마감", "로고를 더 크게"], ENGLISH, translator, ("긴급",))
        )
        assert result == [
            TranslatedLine("긴급 금요일 마감", reserved=True),
            TranslatedLine("Make the logo bigger"),
        ]
        assert len(translator.calls) == 1

    def test_blank_lines_dropped(self):
        translator = FakeTranslator()
        result = asyncio.run(translate_lines(["", "  ", "1"], ENGLISH, translator))
        assert result == [TranslatedLine("1")]
        assert translator.calls == []

    def test_order_preserved_when_calls_finish_out_of_order(self):
        translator = FakeTranslator(
            phrases={"첫째": "first", "둘째": "second", "셋째": "third"},
            delays={"첫째": 0.05, "둘째": 0.0, "셋째": 0.02},
        )
        result = asyncio.run(translate_lines(["첫째", "둘째", "셋째"], ENGLISH, translator))
        assert [line.text for line in result] == ["first", "second", "third"]

    def test_lines_translated_independently(self):
        translator = FakeTranslator(phrases={})
        asyncio.run(translate_lines(["가", "나"], ENGLISH, translator))
        assert sorted(text for text, _ in translator.calls) == ["가", "나"]

    def test_failure_aborts_whole_batch(self):
        translator = FakeTranslator(error=RuntimeError("boom"))
        with pytest.raises(RuntimeError):
            asyncio.run(translate_lines(["1", "로고"], ENGLISH, translator))

    def test_translated_output_with_keyword_not_flagged(self):
        translator = FakeTranslator(phrases={"구석에 표시": "Mark this URGENT in the corner"})
        result = asyncio.run(translate_lines(["구석에 표시"], ENGLISH, translator, ("URGENT",)))
        assert result == [TranslatedLine("Mark this URGENT in the corner", reserved=False)]

    def test_empty_input(self):
        translator = FakeTranslator()
        assert asyncio.run(translate_lines([], ENGLISH, translator)) == []
