"""Microsoft documentation search routes."""
import logging
from fastapi import APIRouter, status
from fastapi.responses import PlainTextResponse

from ...core.exceptions import InvalidArgument, McpClientError
from ...dependencies.docs import DocsServiceDep
from ...models import SearchRequest, SearchResponse

logger = logging.getLogger(__name__)

SEARCH_FAILED_MESSAGE = "An error occurred while searching Microsoft documentation"
EMPTY_QUERY_MESSAGE = "Query is required and cannot be empty"

router = APIRouter(
    prefix="/api",
    tags=["microsoft-docs"]
)


@router.post(
    "/msdocsping",
    response_model=SearchResponse,
    responses={
        400: {"description": "Missing or empty query", "content": {"text/plain": {}}},
        500: {"description": "Search failed", "content": {"text/plain": {}}},
    },
)
async def ms_docs_ping(request: SearchRequest, docs_service: DocsServiceDep):
    """Search Microsoft documentation."""
    if request.query is None or not request.query.strip():
        return PlainTextResponse(EMPTY_QUERY_MESSAGE, status_code=status.HTTP_400_BAD_REQUEST)

    try:
        return await docs_service.query_docs(request.query)
    except InvalidArgument as e:
        return PlainTextResponse(str(e), status_code=status.HTTP_400_BAD_REQUEST)
    except McpClientError as e:
        logger.error(f"Microsoft Docs search failed: {e}")
        return PlainTextResponse(SEARCH_FAILED_MESSAGE, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
    except Exception as e:
        logger.error(f"Unexpected error during Microsoft Docs search: {e}", exc_info=True)
        return PlainTextResponse(SEARCH_FAILED_MESSAGE, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
