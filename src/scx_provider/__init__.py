"""
scx_provider - SCX chat, embedding and transcription models behind one provider object.
"""

from ._exceptions import (
    APICallError,
    LoadAPIKeyError,
    NoSuchModelError,
    ProviderMisuseError,
    RequestAbortedError,
    ScxError,
)
from .chat import ScxChatModel
from .config import ScxProviderSettings
from .embedding import ScxEmbeddingModel
from .interfaces import EmbeddingResult, TranscriptionResult, TranscriptionSegment
from .provider import ScxProvider, create_scx
from .transcription import ScxTranscriptionModel

try:
    from ._version import version as __version__
except ImportError:
    __version__ = "unknown"

# Default provider, reads SCX_API_KEY on each request
scx = create_scx()

__all__ = [
    "create_scx",
    "scx",
    "ScxProvider",
    "ScxProviderSettings",
    "ScxChatModel",
    "ScxEmbeddingModel",
    "ScxTranscriptionModel",
    "EmbeddingResult",
    "TranscriptionResult",
    "TranscriptionSegment",
    "ScxError",
    "APICallError",
    "LoadAPIKeyError",
    "NoSuchModelError",
    "ProviderMisuseError",
    "RequestAbortedError",
    "__version__",
]
