"""
SCX provider - one configuration object that builds chat, embedding and transcription models.
"""

import logging
import warnings
from typing import Dict, Optional

import httpx
import openai

from ._exceptions import NoSuchModelError, ProviderMisuseError
from .chat import ScxChatModel, create_chat_client
from .config import Config, ProviderConfig, ScxProviderSettings, load_api_key, without_trailing_slash
from .embedding import ScxEmbeddingModel
from .transcription import ScxTranscriptionModel


class ScxProvider:
    """Model provider for the SCX API.

    Calling the provider returns a chat model, same as provider.chat(model_id).
    The API key is resolved on every request, so a rotated key is picked up
    without building a new provider.

    Example:
        scx = create_scx(api_key="...")
        result = await scx.embedding_model("E5-Mistral-7B-Instruct").do_embed(["hello"])
    """

    def __init__(self, settings: Optional[ScxProviderSettings] = None):
        if isinstance(settings, str):
            raise ProviderMisuseError(
                "The SCX model function cannot be called as a constructor. "
                "Use provider(model_id) or provider.chat(model_id) instead.",
                provider="scx",
                model=settings,
            )
        if settings is not None and not isinstance(settings, ScxProviderSettings):
            raise ProviderMisuseError(
                f"ScxProvider expects ScxProviderSettings, got {type(settings).__name__}. "
                "Use create_scx(**options) to pass options as keywords.",
                provider="scx",
            )
        settings = settings or ScxProviderSettings()

        self.logger = logging.getLogger("scx")
        self.config = Config()
        self._settings = settings
        self._base_url = without_trailing_slash(settings.base_url) or self.config.default_base_url
        self._chat_client: Optional[openai.AsyncOpenAI] = None

    @property
    def specification_version(self) -> str:
        return "v3"

    @property
    def base_url(self) -> str:
        return self._base_url

    def _get_api_key(self) -> str:
        return load_api_key(
            api_key=self._settings.api_key,
            environment_variable_name=self.config.api_key_env_var,
            description="SCX",
        )

    def _get_headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self._get_api_key()}",
            **(self._settings.headers or {}),
        }

    def _model_config(self, family: str) -> ProviderConfig:
        return ProviderConfig(
            provider=f"{self.config.provider_name}.{family}",
            base_url=self._base_url,
            headers=self._get_headers,
            http_client=self._settings.http_client,
        )

    def _get_chat_client(self) -> openai.AsyncOpenAI:
        """Return the shared chat client bound to a freshly resolved key."""
        api_key = self._get_api_key()
        if self._chat_client is None:
            self.logger.debug(f"[{self.config.provider_name}] Creating chat client for {self._base_url}")
            self._chat_client = create_chat_client(
                api_key=api_key,
                base_url=self._base_url,
                default_headers=self._settings.headers,
                http_client=self._settings.http_client,
            )
            return self._chat_client
        return self._chat_client.with_options(api_key=api_key)

    def __call__(self, model_id: str) -> ScxChatModel:
        return self.chat(model_id)

    def chat(self, model_id: str) -> ScxChatModel:
        """Create a chat model (e.g. 'DeepSeek-V3.1', 'Llama-4-Maverick-17B-128E-Instruct')."""
        return ScxChatModel(model_id, self._get_chat_client, provider=f"{self.config.provider_name}.chat")

    def language_model(self, model_id: str) -> ScxChatModel:
        return self.chat(model_id)

    def embedding_model(self, model_id: str) -> ScxEmbeddingModel:
        """Create an embedding model (e.g. 'E5-Mistral-7B-Instruct')."""
        return ScxEmbeddingModel(
            model_id,
            self._model_config("embedding"),
            max_embeddings_per_call=self.config.max_embeddings_per_call,
        )

    def text_embedding_model(self, model_id: str) -> ScxEmbeddingModel:
        """Deprecated alias of embedding_model()."""
        warnings.warn(
            "text_embedding_model() is deprecated, use embedding_model() instead",
            DeprecationWarning,
            stacklevel=2,
        )
        return self.embedding_model(model_id)

    def transcription_model(self, model_id: str) -> ScxTranscriptionModel:
        """Create a transcription model (e.g. 'whisper-large-v3')."""
        return ScxTranscriptionModel(model_id, self._model_config("transcription"))

    def image_model(self, model_id: str):
        raise NoSuchModelError("Image model not supported", model_type="image_model",
                               provider=self.config.provider_name, model=model_id)


def create_scx(*, base_url: Optional[str] = None, api_key: Optional[str] = None,
               headers: Optional[Dict[str, str]] = None,
               http_client: Optional[httpx.AsyncClient] = None) -> ScxProvider:
    """Create an SCX provider.

    Args:
        base_url: API root, defaults to https://api.scx.ai/v1
        api_key: Falls back to the SCX_API_KEY environment variable
        headers: Extra headers sent with every request
        http_client: httpx.AsyncClient to send requests with, owned by the caller
    """
    return ScxProvider(ScxProviderSettings(
        base_url=base_url,
        api_key=api_key,
        headers=headers,
        http_client=http_client,
    ))
