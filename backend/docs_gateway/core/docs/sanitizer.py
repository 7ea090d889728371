"""Query validation and sanitization."""
import logging
from typing import Optional

from ..exceptions import InvalidArgument
from ...models import MAX_QUERY_LENGTH

logger = logging.getLogger(__name__)

# Characters stripped from queries before they leave the service
DENYLISTED_CHARACTERS = frozenset('<>"\'')


def sanitize_query(query: Optional[str], max_length: int = MAX_QUERY_LENGTH) -> str:
    """
    Trim, strip denylisted characters and truncate a search query.

    This is a denylist filter, not an escaping or encoding step.

    Raises:
        InvalidArgument: if the query is missing, blank, or holds nothing but
            denylisted characters.
    """
    if query is None or not query.strip():
        raise InvalidArgument("Query cannot be empty")

    sanitized = "".join(ch for ch in query.strip() if ch not in DENYLISTED_CHARACTERS)

    if len(sanitized) > max_length:
        sanitized = sanitized[:max_length]
        logger.warning(f"Query was truncated to {max_length} characters")

    logger.debug(
        f"Query sanitized. Original length: {len(query)}, Sanitized length: {len(sanitized)}"
    )

    if not sanitized:
        raise InvalidArgument("Query contains no searchable characters")

    return sanitized
