"""Tests for payload normalization."""
import json
from datetime import timezone
from unittest.mock import patch

import pytest

from docs_gateway.core.docs import normalizer
from docs_gateway.core.docs.normalizer import (
    FALLBACK_TITLE,
    RESPONSE_SOURCE,
    Parsed,
    Unparsed,
    chunk_from_element,
    normalize_response,
    parse_payload,
    try_load_json,
)

ENDPOINT = "https://learn.example.com/api/mcp"
QUERY = "Azure Functions deployment"


def _payload(*items):
    return json.dumps(list(items))


class TestTryLoadJson:

    def test_valid_json(self):
        attempt = try_load_json('[{"a": 1}]')
        assert attempt.ok
        assert attempt.value == [{"a": 1}]

    def test_invalid_json_does_not_raise(self):
        attempt = try_load_json("plain text result")
        assert not attempt.ok
        assert attempt.value is None

    def test_null_is_a_successful_parse(self):
        attempt = try_load_json("null")
        assert attempt.ok
        assert attempt.value is None

    def test_oversized_integer_does_not_raise(self):
        attempt = try_load_json("1" * 5000)
        assert attempt.ok is False or isinstance(attempt.value, int)

    def test_deep_nesting_does_not_raise(self):
        attempt = try_load_json("[" * 100000 + "]" * 100000)
        assert not attempt.ok


class TestParsePayload:

    def test_array_is_parsed(self):
        result = parse_payload(_payload({"title": "T", "content": "C", "contentUrl": "U"}), ENDPOINT)

        assert isinstance(result, Parsed)
        assert [c.content for c in result.chunks] == ["C"]

    def test_plain_text_is_unparsed(self):
        result = parse_payload("plain text result", ENDPOINT)
        assert result == Unparsed("plain text result")

    @pytest.mark.parametrize("raw", ['{"content": "C"}', '"quoted"', "42", "true"])
    def test_non_array_json_is_unparsed(self, raw):
        assert parse_payload(raw, ENDPOINT) == Unparsed(raw)

    def test_null_yields_no_chunks(self):
        assert parse_payload("null", ENDPOINT) == Parsed([])

    def test_non_object_elements_are_skipped(self):
        raw = json.dumps(["text", 3, None, [1], {"content": "kept"}])

        result = parse_payload(raw, ENDPOINT)

        assert [c.content for c in result.chunks] == ["kept"]

    def test_element_error_skips_only_that_element(self):
        real = normalizer.chunk_from_element
        calls = []

        def flaky(element, source_endpoint):
            calls.append(element)
            if len(calls) == 1:
                raise RuntimeError("boom")
            return real(element, source_endpoint)

        raw = _payload({"content": "first"}, {"content": "second"})
        with patch.object(normalizer, "chunk_from_element", side_effect=flaky):
            result = parse_payload(raw, ENDPOINT)

        assert [c.content for c in result.chunks] == ["second"]


class TestChunkFromElement:

    def test_all_fields(self):
        chunk = chunk_from_element({"title": "T1", "content": "C1", "contentUrl": "U1"}, ENDPOINT)

        assert (chunk.title, chunk.content, chunk.content_url) == ("T1", "C1", "U1")
        assert chunk.metadata is None
        assert chunk.timestamp.tzinfo == timezone.utc

    def test_missing_title_and_url_fall_back(self):
        chunk = chunk_from_element({"content": "C"}, ENDPOINT)

        assert chunk.title == FALLBACK_TITLE
        assert chunk.content_url == ENDPOINT

    def test_non_string_fields_fall_back(self):
        chunk = chunk_from_element({"title": 5, "content": "C", "contentUrl": {"href": "x"}}, ENDPOINT)

        assert chunk.title == FALLBACK_TITLE
        assert chunk.content_url == ENDPOINT

    def test_empty_title_is_kept(self):
        chunk = chunk_from_element({"title": "", "content": "C"}, ENDPOINT)
        assert chunk.title == ""

    @pytest.mark.parametrize(
        "element",
        [{"title": "T"}, {"title": "T", "content": ""}, {"title": "T", "content": None}, {"content": ["C"]}],
    )
    def test_missing_content_is_dropped(self, element):
        assert chunk_from_element(element, ENDPOINT) is None


class TestNormalizeResponse:

    def test_single_document(self):
        response = normalize_response(['[{"title":"T1","content":"C1","contentUrl":"U1"}]'], QUERY, ENDPOINT)

        assert response.query == QUERY
        assert response.total_chunks == 1
        assert response.total_characters == 2
        assert response.response_source == RESPONSE_SOURCE
        assert response.error_message is None
        chunk = response.documentation_chunks[0]
        assert (chunk.title, chunk.content, chunk.content_url) == ("T1", "C1", "U1")

    def test_element_without_content_is_dropped(self):
        raw = _payload({"title": "no content"}, {"title": "T", "content": "body"})

        response = normalize_response([raw], QUERY, ENDPOINT)

        assert response.total_chunks == 1
        assert response.documentation_chunks[0].content == "body"

    def test_plain_text_payload_becomes_one_chunk(self):
        response = normalize_response(["plain text result"], QUERY, ENDPOINT)

        assert response.total_chunks == 1
        chunk = response.documentation_chunks[0]
        assert chunk.content == "plain text result"
        assert chunk.title == FALLBACK_TITLE
        assert chunk.content_url == ENDPOINT
        assert response.total_characters == len("plain text result")

    def test_oversized_integer_payload_falls_back_to_text(self):
        raw = "1" * 5000

        response = normalize_response([raw], QUERY, ENDPOINT)

        assert response.total_chunks == 1
        assert response.documentation_chunks[0].content == raw
        assert response.documentation_chunks[0].title == FALLBACK_TITLE

    def test_array_with_oversized_integer_is_not_lost(self):
        raw = '[{"title": "T", "content": "C", "rank": ' + "9" * 5000 + "}]"

        response = normalize_response([raw], QUERY, ENDPOINT)

        assert response.total_chunks == 1
        assert response.documentation_chunks[0].content in ("C", raw)

    def test_deeply_nested_payload_falls_back_to_text(self):
        deep = "[" * 100000 + "]" * 100000

        response = normalize_response([deep, "tail"], QUERY, ENDPOINT)

        assert [c.content for c in response.documentation_chunks] == [deep, "tail"]
        assert response.total_characters == len(deep) + len("tail")

    def test_order_follows_payloads_then_elements(self):
        payloads = [
            _payload({"content": "a1"}, {"content": "a2"}),
            "free text",
            _payload({"content": "b1"}),
        ]

        response = normalize_response(payloads, QUERY, ENDPOINT)

        assert [c.content for c in response.documentation_chunks] == ["a1", "a2", "free text", "b1"]

    def test_empty_payload_list(self):
        response = normalize_response([], QUERY, ENDPOINT)

        assert response.total_chunks == 0
        assert response.total_characters == 0
        assert response.documentation_chunks == []

    def test_failing_payload_is_skipped(self):
        real = normalizer.parse_payload

        def flaky(raw, source_endpoint):
            if raw == "bad":
                raise RuntimeError("unexpected")
            return real(raw, source_endpoint)

        with patch.object(normalizer, "parse_payload", side_effect=flaky):
            response = normalize_response(["bad", "good"], QUERY, ENDPOINT)

        assert [c.content for c in response.documentation_chunks] == ["good"]

    @pytest.mark.parametrize(
        "payloads",
        [
            [],
            ["only text"],
            ["null", "[]", "{}"],
            [_payload({"content": "x" * 40}, {"title": "skip"}), "tail text", "[1, 2]"],
            [_payload(*({"content": str(i) * i} for i in range(1, 12)))],
        ],
    )
    def test_count_invariants(self, payloads):
        response = normalize_response(payloads, QUERY, ENDPOINT)

        assert response.total_chunks == len(response.documentation_chunks)
        assert response.total_characters == sum(len(c.content) for c in response.documentation_chunks)

    def test_serializes_with_camel_case_keys(self):
        response = normalize_response(['[{"title":"T1","content":"C1","contentUrl":"U1"}]'], QUERY, ENDPOINT)

        body = response.model_dump(mode="json", by_alias=True)

        assert set(body) == {
            "query", "searchTimestamp", "documentationChunks", "totalChunks",
            "totalCharacters", "responseSource", "errorMessage",
        }
        assert set(body["documentationChunks"][0]) == {"title", "content", "contentUrl", "timestamp", "metadata"}
