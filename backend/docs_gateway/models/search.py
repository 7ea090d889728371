"""Search-related Pydantic models."""
from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


MAX_QUERY_LENGTH = 500


class SearchRequest(BaseModel):
    """Search request model.

    ``query`` is optional here so that a missing field reaches the route and is
    answered with a plain 400 instead of a validation payload.
    """
    query: Optional[str] = Field(
        default=None,
        description="Natural-language documentation query",
        max_length=MAX_QUERY_LENGTH,
    )


class DocumentationChunk(BaseModel):
    """One unit of retrieved documentation."""
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    title: str = Field(..., description="Document title")
    content: str = Field(..., description="Document content")
    content_url: str = Field(..., description="Source URL")
    timestamp: datetime = Field(..., description="Capture time (UTC)")
    metadata: Optional[Dict[str, Any]] = Field(default=None, description="Extra attributes")


class SearchResponse(BaseModel):
    """Normalized search response envelope."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    query: str = Field(..., description="Search query as sent to the tool")
    search_timestamp: datetime = Field(..., description="Time the search was normalized")
    documentation_chunks: List[DocumentationChunk] = Field(default_factory=list)
    total_chunks: int = Field(default=0, ge=0)
    total_characters: int = Field(default=0, ge=0)
    response_source: str = Field(..., description="Label of the upstream source")
    error_message: Optional[str] = Field(default=None)
