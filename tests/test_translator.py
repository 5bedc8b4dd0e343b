"""Tests for src.transcription.translator: chunked translation."""

import asyncio

import httpx
import pytest

from src.chunker import split_lines
from src.llm import TerminalGenerationError
from src.transcription import TranslatedContent, needs_translation, translate, translate_content


def _failing_handler(calls):
    def handler(request):
        calls.append(request)
        return httpx.Response(500, text="should not be called")

    return handler


class TestTranslationIdentity:
    @pytest.mark.asyncio
    async def test_same_language_is_identity(self, make_client):
        """Japanese source with Japanese output issues zero calls."""
        calls = []
        client = make_client(_failing_handler(calls))
        text = "## 導入\n\nホスト: こんにちは。"
        assert await translate(text, "ja", client, target_language="ja") == text
        assert calls == []

    @pytest.mark.asyncio
    async def test_language_codes_normalized(self, make_client):
        calls = []
        client = make_client(_failing_handler(calls))
        assert await translate("text", " JA ", client, target_language="ja") == "text"
        assert calls == []

    @pytest.mark.asyncio
    async def test_blank_text_not_sent(self, make_client):
        calls = []
        client = make_client(_failing_handler(calls))
        assert await translate("  \n", "en", client, target_language="ja") == "  \n"
        assert calls == []

    def test_needs_translation(self):
        assert needs_translation("en", "ja")
        assert not needs_translation("ja", "JA")


class TestChunkedTranslation:
    @pytest.mark.asyncio
    async def test_single_chunk(self, make_client, message_response, request_json):
        captured = []

        def handler(request):
            payload = request_json(request)
            captured.append(payload)
            return message_response("  翻訳されたテキスト  \n")

        client = make_client(handler)
        result = await translate("## Intro\n\nHost: Hello.", "en", client, target_language="ja")

        assert result == "翻訳されたテキスト"
        assert len(captured) == 1
        assert "English" in captured[0]["system"]
        assert "Japanese" in captured[0]["system"]

    @pytest.mark.asyncio
    async def test_chunks_joined_in_order(self, make_client, message_response, request_json):
        """Each line-safe chunk is translated once and joined with blank lines."""
        captured = []

        def handler(request):
            message = request_json(request)["messages"][0]["content"]
            captured.append(message)
            return message_response(message.upper())

        client = make_client(handler)
        text = "".join(f"Guest A: this is line {i} of the talk.\n" for i in range(600))
        expected_chunks = split_lines(text, 10000)

        result = await translate(text, "en", client, target_language="ja")

        assert len(expected_chunks) > 1
        assert sorted(captured) == sorted(expected_chunks)
        assert result == "\n\n".join(chunk.strip().upper() for chunk in expected_chunks)

    @pytest.mark.asyncio
    async def test_chunk_failure_fails_translation(self, make_client, message_response, request_json):
        def handler(request):
            if "line 5 " in request_json(request)["messages"][0]["content"]:
                return httpx.Response(403, text="forbidden")
            return message_response("ok")

        client = make_client(handler)
        text = "".join(f"line {i} of the talk.\n" for i in range(20))
        with pytest.raises(TerminalGenerationError):
            await translate(text, "en", client, target_language="ja", threshold_chars=100)


class TestTranslateContent:
    @pytest.mark.asyncio
    async def test_all_parts_translated(self, make_client, message_response, request_json):
        def handler(request):
            message = request_json(request)["messages"][0]["content"]
            return message_response(f"[ja] {message}")

        client = make_client(handler)
        translated = await translate_content(
            "short summary", "long summary", "## Title\n\nHost: Hi.", "en", client, "ja"
        )
        assert translated == TranslatedContent(
            summary_400="[ja] short summary",
            summary_2000="[ja] long summary",
            full_text="[ja] ## Title\n\nHost: Hi.",
        )

    @pytest.mark.asyncio
    async def test_failure_cancels_sibling_translations(self, make_client, message_response, request_json):
        """Once one part fails, no other part's request completes."""
        completed = []

        async def handler(request):
            message = request_json(request)["messages"][0]["content"]
            if message == "short":
                return httpx.Response(401, text="unauthorized")
            await asyncio.sleep(0.05)
            completed.append(message)
            return message_response(f"[ja] {message}")

        client = make_client(handler)
        with pytest.raises(TerminalGenerationError):
            await translate_content("short", "long", "full", "en", client, "ja")

        await asyncio.sleep(0.2)
        assert completed == []
