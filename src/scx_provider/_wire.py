"""
Pydantic models for the SCX API response bodies.
Fields are strict: absent fields default, wrongly typed values fail validation.
"""

from typing import List, Optional
from pydantic import BaseModel, StrictFloat, StrictInt, StrictStr


class EmbeddingItem(BaseModel):
    """One vector in an embeddings response."""
    embedding: List[StrictFloat]


class EmbeddingUsagePayload(BaseModel):
    total_tokens: Optional[StrictInt] = None
    prompt_tokens: Optional[StrictInt] = None


class EmbeddingApiResponse(BaseModel):
    """Object-shaped embeddings response. The API may also reply with a bare list of items."""
    data: Optional[List[EmbeddingItem]] = None
    usage: Optional[EmbeddingUsagePayload] = None


class TranscriptionSegmentPayload(BaseModel):
    text: StrictStr = ""
    start: StrictFloat
    end: StrictFloat


class TranscriptionApiResponse(BaseModel):
    """Transcription response model."""
    text: Optional[StrictStr] = None
    segments: Optional[List[TranscriptionSegmentPayload]] = None
    language: Optional[StrictStr] = None
    duration: Optional[StrictFloat] = None
