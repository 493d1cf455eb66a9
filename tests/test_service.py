"""Tests for LookupService branching and synonym/antonym aggregation."""

import unittest
from unittest.mock import AsyncMock, MagicMock

import httpx

from dictio_bot.config import DisplayConfig
from dictio_bot.dictionary_client import DictionaryAPIError, DictionaryClient
from dictio_bot.models import DictionaryEntry
from dictio_bot.service import LookupService, collect_lexical_set, format_suggestions, unique
from sample_data import BARE_PAYLOAD, HELLO_PAYLOAD


def make_service(entry=None, *, fetch_error=None, suggestions=None):
    client = MagicMock(spec=DictionaryClient)
    client.fetch_entry = AsyncMock(return_value=entry, side_effect=fetch_error)
    spell_checker = MagicMock()
    spell_checker.get_suggestions = AsyncMock(return_value=suggestions or [])
    service = LookupService(client=client, spell_checker=spell_checker, config=DisplayConfig())
    return service, client, spell_checker


class TestAggregation(unittest.TestCase):

    def test_unique_preserves_first_seen_order(self):
        self.assertEqual(unique(["b", "a", "b", "c", "a"]), ["b", "a", "c"])

    def test_collects_definition_then_meaning_level(self):
        lexical_set = collect_lexical_set(DictionaryEntry.from_response(HELLO_PAYLOAD))
        self.assertEqual(lexical_set.synonyms, ["greeting", "salutation"])
        self.assertEqual(lexical_set.antonyms, ["bye", "goodbye"])

    def test_no_lists_anywhere(self):
        lexical_set = collect_lexical_set(DictionaryEntry.from_response(BARE_PAYLOAD))
        self.assertTrue(lexical_set.is_empty)

    def test_format_suggestions_takes_three(self):
        self.assertEqual(format_suggestions(["cat", "bat", "hat", "rat"]), "`cat`, `bat`, `hat`")


class TestDefine(unittest.IsolatedAsyncioTestCase):

    async def test_success_builds_embed(self):
        service, client, _ = make_service(DictionaryEntry.from_response(HELLO_PAYLOAD))
        reply = await service.define("hello")
        client.fetch_entry.assert_awaited_once_with("hello")
        self.assertEqual(reply.status, "ok")
        self.assertIsNone(reply.content)
        self.assertEqual(reply.embed.title, "📖 Hello")

    async def test_not_found_with_suggestions(self):
        service, _, spell_checker = make_service(None, suggestions=["cat", "bat", "hat", "rat"])
        reply = await service.define("caat")
        spell_checker.get_suggestions.assert_awaited_once_with("caat")
        self.assertEqual(reply.status, "not_found")
        self.assertIsNone(reply.embed)
        self.assertEqual(
            reply.content,
            "❌ No definition found for **caat**.\n\n💡 Did you mean: `cat`, `bat`, `hat`?",
        )
        self.assertNotIn("rat", reply.content)

    async def test_not_found_without_suggestions(self):
        service, _, _ = make_service(None, suggestions=[])
        reply = await service.define("qwxz")
        self.assertEqual(reply.content, "❌ No definition found for **qwxz**. Check your spelling!")

    async def test_upstream_error_is_generic(self):
        service, _, spell_checker = make_service(fetch_error=DictionaryAPIError(503))
        with self.assertLogs("dictio_bot.service", level="ERROR"):
            reply = await service.define("hello")
        self.assertEqual(reply.status, "error")
        self.assertEqual(
            reply.content,
            "❌ An error occurred while fetching the definition. Please try again later.",
        )
        self.assertNotIn("503", reply.content)
        spell_checker.get_suggestions.assert_not_awaited()

    async def test_suggestion_failure_falls_into_catch_all(self):
        service, _, spell_checker = make_service(None)
        spell_checker.get_suggestions.side_effect = OSError("word list missing")
        with self.assertLogs("dictio_bot.service", level="ERROR"):
            reply = await service.define("hello")
        self.assertEqual(reply.status, "error")

    async def test_transport_failure_is_contained(self):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = DictionaryClient(base_url="https://dict.test/", transport=httpx.MockTransport(refuse))
        service = LookupService(client=client, spell_checker=MagicMock(), config=DisplayConfig())
        try:
            with self.assertLogs("dictio_bot.service", level="ERROR") as logs:
                reply = await service.define("hello")
        finally:
            await client.close()
        self.assertEqual(reply.status, "error")
        self.assertIsInstance(logs.records[0].exc_info[1], httpx.ConnectError)


class TestThesaurus(unittest.IsolatedAsyncioTestCase):

    async def test_success_builds_embed(self):
        service, _, _ = make_service(DictionaryEntry.from_response(HELLO_PAYLOAD))
        reply = await service.thesaurus("hello")
        self.assertEqual(reply.status, "ok")
        self.assertEqual(reply.embed.title, "📚 Thesaurus: Hello")
        self.assertEqual(reply.embed.fields[0].value, "greeting, salutation")

    async def test_no_synonyms_or_antonyms(self):
        service, _, _ = make_service(DictionaryEntry.from_response(BARE_PAYLOAD))
        reply = await service.thesaurus("zyzzyva")
        self.assertEqual(reply.status, "empty")
        self.assertIsNone(reply.embed)
        self.assertEqual(reply.content, "❌ No synonyms or antonyms found for **zyzzyva**.")

    async def test_not_found_wording(self):
        service, _, _ = make_service(None, suggestions=["hot"])
        reply = await service.thesaurus("hott")
        self.assertEqual(
            reply.content,
            "❌ No thesaurus data found for **hott**.\n\n💡 Did you mean: `hot`?",
        )

    async def test_parse_failure_is_generic(self):
        service, _, _ = make_service(fetch_error=ValueError("bad json"))
        with self.assertLogs("dictio_bot.service", level="ERROR"):
            reply = await service.thesaurus("hello")
        self.assertEqual(
            reply.content,
            "❌ An error occurred while fetching thesaurus data. Please try again later.",
        )
