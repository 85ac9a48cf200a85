"""
Chat models for SCX - the API follows the OpenAI specification, so requests go through the openai SDK.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

import httpx
import openai

from .interfaces import Headers


def create_chat_client(api_key: str, base_url: str, default_headers: Optional[Dict[str, str]] = None,
                       http_client: Optional[httpx.AsyncClient] = None) -> openai.AsyncOpenAI:
    """Create an OpenAI-compatible client for SCX chat completions.

    Retries and timeouts are disabled; callers decide both.
    """
    return openai.AsyncOpenAI(
        api_key=api_key,
        base_url=base_url,
        default_headers=default_headers,
        http_client=http_client,
        max_retries=0,
        timeout=None,
    )


class ScxChatModel:
    """Forwards chat requests to the shared OpenAI-compatible client unchanged."""

    specification_version = "v3"

    def __init__(self, model_id: str, client: Callable[[], openai.AsyncOpenAI], provider: str = "scx.chat"):
        self.model_id = model_id
        self.provider = provider
        self._client = client
        self.logger = logging.getLogger("scx.chat")

    def _request_kwargs(self, headers: Optional[Headers], kwargs: Dict[str, Any]) -> Dict[str, Any]:
        request_kwargs = dict(kwargs)
        extra_headers = dict(request_kwargs.pop("extra_headers", None) or {})
        if headers:
            extra_headers.update({key: value for key, value in headers.items() if value is not None})
        if extra_headers:
            request_kwargs["extra_headers"] = extra_headers
        return request_kwargs

    async def do_generate(self, messages: List[Dict[str, Any]], headers: Optional[Headers] = None, **kwargs):
        """Create a chat completion; returns the SDK's ChatCompletion."""
        request_kwargs = self._request_kwargs(headers, kwargs)
        self.logger.debug(f"[{self.provider}] Chat completion with {self.model_id} ({len(messages)} message(s))")
        return await self._client().chat.completions.create(
            model=self.model_id,
            messages=messages,
            **request_kwargs
        )

    async def do_stream(self, messages: List[Dict[str, Any]], headers: Optional[Headers] = None, **kwargs):
        """Create a streaming chat completion; returns the SDK's async stream of chunks."""
        request_kwargs = self._request_kwargs(headers, kwargs)
        request_kwargs["stream"] = True
        self.logger.debug(f"[{self.provider}] Streaming chat completion with {self.model_id}")
        return await self._client().chat.completions.create(
            model=self.model_id,
            messages=messages,
            **request_kwargs
        )
