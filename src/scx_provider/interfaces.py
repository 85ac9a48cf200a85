"""Model-provider contracts and the result types returned by SCX models.

Each model family is a Protocol so the provider can be registered with any
orchestration code that only relies on these shapes.
"""

import asyncio
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence, Union, runtime_checkable


@dataclass(frozen=True)
class EmbeddingUsage:
    tokens: int


@dataclass(frozen=True)
class EmbeddingResponseInfo:
    headers: Dict[str, str]
    body: Any = None


@dataclass(frozen=True)
class EmbeddingResult:
    """Vectors in the same order as the request's values."""
    embeddings: List[List[float]]
    usage: Optional[EmbeddingUsage]
    response: EmbeddingResponseInfo
    warnings: List[Any] = field(default_factory=list)


@dataclass(frozen=True)
class TranscriptionSegment:
    text: str
    start_second: float
    end_second: float


@dataclass(frozen=True)
class RequestInfo:
    """The exact serialized body that was sent."""
    body: str


@dataclass(frozen=True)
class TranscriptionResponseInfo:
    timestamp: datetime
    model_id: str
    headers: Dict[str, str]
    body: Any = None


@dataclass(frozen=True)
class TranscriptionResult:
    text: str
    segments: List[TranscriptionSegment]
    language: Optional[str]
    duration_in_seconds: Optional[float]
    request: RequestInfo
    response: TranscriptionResponseInfo
    warnings: List[Any] = field(default_factory=list)


Headers = Mapping[str, Optional[str]]


@runtime_checkable
class LanguageModel(Protocol):
    """Protocol for chat models."""

    specification_version: str
    provider: str
    model_id: str

    async def do_generate(self, messages: List[Dict[str, Any]], headers: Optional[Headers] = None,
                          **kwargs) -> Any:
        ...

    async def do_stream(self, messages: List[Dict[str, Any]], headers: Optional[Headers] = None,
                        **kwargs) -> Any:
        ...


@runtime_checkable
class EmbeddingModel(Protocol):
    """Protocol for embedding models."""

    specification_version: str
    provider: str
    model_id: str
    max_embeddings_per_call: int
    supports_parallel_calls: bool

    async def do_embed(self, values: Sequence[str], headers: Optional[Headers] = None,
                       abort_signal: Optional[asyncio.Event] = None) -> EmbeddingResult:
        ...


@runtime_checkable
class TranscriptionModel(Protocol):
    """Protocol for transcription models."""

    specification_version: str
    provider: str
    model_id: str

    async def do_generate(self, audio: Union[bytes, bytearray, memoryview, str], media_type: str,
                          provider_options: Optional[Dict[str, Dict[str, Any]]] = None,
                          headers: Optional[Headers] = None,
                          abort_signal: Optional[asyncio.Event] = None) -> TranscriptionResult:
        ...


@runtime_checkable
class ModelProvider(Protocol):
    """Protocol for providers: callable for chat plus one accessor per model family."""

    specification_version: str

    def __call__(self, model_id: str) -> LanguageModel:
        ...

    def language_model(self, model_id: str) -> LanguageModel:
        ...

    def embedding_model(self, model_id: str) -> EmbeddingModel:
        ...

    def transcription_model(self, model_id: str) -> TranscriptionModel:
        ...
