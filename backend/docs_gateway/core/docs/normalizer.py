"""Normalization of raw Microsoft Docs tool payloads into a search response."""
import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, List, Optional, Union

from ...models import DocumentationChunk, SearchResponse

logger = logging.getLogger(__name__)

FALLBACK_TITLE = "Microsoft Documentation"
RESPONSE_SOURCE = "Microsoft Learn MCP Server"


@dataclass(frozen=True)
class JsonAttempt:
    """Outcome of ``try_load_json``; ``value`` is meaningful only when ``ok``."""
    ok: bool
    value: Any = None


@dataclass(frozen=True)
class Parsed:
    """Payload was a JSON array; holds the chunks built from its elements."""
    chunks: List[DocumentationChunk] = field(default_factory=list)


@dataclass(frozen=True)
class Unparsed:
    """Payload was not a JSON array and is kept as plain text."""
    text: str


PayloadParse = Union[Parsed, Unparsed]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def try_load_json(raw: str) -> JsonAttempt:
    """Decode ``raw`` as JSON without raising on malformed input."""
    try:
        return JsonAttempt(ok=True, value=json.loads(raw))
    except (ValueError, RecursionError, TypeError):
        return JsonAttempt(ok=False)


def get_string_field(element: dict, name: str) -> Optional[str]:
    """Return ``element[name]`` if it is a string, else None."""
    value = element.get(name)
    return value if isinstance(value, str) else None


def chunk_from_element(element: Any, source_endpoint: str) -> Optional[DocumentationChunk]:
    """Build a chunk from one array element, or None if it has no content."""
    if not isinstance(element, dict):
        logger.warning(f"Skipping non-object element of type {type(element).__name__}")
        return None

    title = get_string_field(element, "title")
    content = get_string_field(element, "content")
    content_url = get_string_field(element, "contentUrl")

    if not content:
        logger.debug("Skipping JSON element - no content found")
        return None

    chunk = DocumentationChunk(
        title=title if title is not None else FALLBACK_TITLE,
        content=content,
        content_url=content_url if content_url is not None else source_endpoint,
        timestamp=_utcnow(),
    )
    logger.debug(f"Parsed documentation chunk: {chunk.title}, Content length: {len(chunk.content)}")
    return chunk


def parse_payload(raw: str, source_endpoint: str) -> PayloadParse:
    """Classify one raw payload as a parsed JSON array or plain text."""
    attempt = try_load_json(raw)
    if not attempt.ok:
        return Unparsed(raw)

    if attempt.value is None:
        # literal JSON null carries no documents
        return Parsed([])

    if not isinstance(attempt.value, list):
        return Unparsed(raw)

    chunks = []
    for index, element in enumerate(attempt.value):
        try:
            chunk = chunk_from_element(element, source_endpoint)
        except Exception as e:
            logger.warning(f"Failed to parse element {index} into a documentation chunk: {e}", exc_info=True)
            continue
        if chunk is not None:
            chunks.append(chunk)
    return Parsed(chunks)


def fallback_chunk(text: str, source_endpoint: str) -> DocumentationChunk:
    """Wrap a plain-text payload as a single chunk."""
    return DocumentationChunk(
        title=FALLBACK_TITLE,
        content=text,
        content_url=source_endpoint,
        timestamp=_utcnow(),
    )


def normalize_response(
    raw_payloads: List[str],
    original_query: str,
    source_endpoint: str,
) -> SearchResponse:
    """
    Turn raw tool payloads into a ``SearchResponse``.

    JSON array payloads contribute one chunk per element that has content;
    anything else becomes a single plain-text chunk. A payload that fails for
    any other reason is logged and skipped, so this never raises on payload
    shape.

    Args:
        raw_payloads: Text payloads in the order the tool returned them.
        original_query: Query the search was run with.
        source_endpoint: Endpoint URL, used when a chunk has no URL.

    Returns:
        SearchResponse whose counts match its chunks.
    """
    documentation_chunks: List[DocumentationChunk] = []

    logger.debug(f"Processing {len(raw_payloads)} raw responses")

    for raw in raw_payloads:
        try:
            parsed = parse_payload(raw, source_endpoint)
            if isinstance(parsed, Parsed):
                documentation_chunks.extend(parsed.chunks)
            else:
                documentation_chunks.append(fallback_chunk(parsed.text, source_endpoint))
                logger.debug(f"Response treated as plain text. Length: {len(parsed.text)}")
        except Exception as e:
            logger.warning(f"Failed to process response chunk, skipping: {e}", exc_info=True)

    total_characters = sum(len(chunk.content) for chunk in documentation_chunks)

    logger.info(
        f"Processed {len(documentation_chunks)} documentation chunks "
        f"with {total_characters} total characters"
    )

    return SearchResponse(
        query=original_query,
        search_timestamp=_utcnow(),
        documentation_chunks=documentation_chunks,
        total_chunks=len(documentation_chunks),
        total_characters=total_characters,
        response_source=RESPONSE_SOURCE,
    )
