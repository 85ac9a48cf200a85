"""
Embedding model for the SCX /embeddings endpoint.
"""

import asyncio
import json
import logging
from typing import Optional, Sequence

from ._http import combine_headers, extract_response_headers, post_json
from ._wire import EmbeddingApiResponse, EmbeddingItem
from .config import ProviderConfig
from .interfaces import EmbeddingResponseInfo, EmbeddingResult, EmbeddingUsage, Headers


class ScxEmbeddingModel:
    """Translates embedding calls into one POST /embeddings request."""

    specification_version = "v3"
    supports_parallel_calls = True

    def __init__(self, model_id: str, config: ProviderConfig, max_embeddings_per_call: int = 2048):
        self.model_id = model_id
        self.max_embeddings_per_call = max_embeddings_per_call
        self.provider = config.provider
        self.config = config
        self.logger = logging.getLogger("scx.embedding")

    async def do_embed(self, values: Sequence[str], headers: Optional[Headers] = None,
                       abort_signal: Optional[asyncio.Event] = None) -> EmbeddingResult:
        """Embed values in one request.

        The max_embeddings_per_call ceiling is not checked here; the API rejects oversized batches.

        Args:
            values: Texts to embed, order is preserved in the result
            headers: Per-call headers, None values are dropped
            abort_signal: Setting this event aborts the in-flight request
        """
        request_body = {
            "model": self.model_id,
            "input": list(values),
        }

        request_headers = combine_headers(self.config.headers(), headers)
        self.logger.debug(f"[{self.provider}] Embedding {len(request_body['input'])} value(s) with {self.model_id}")

        response = await post_json(
            self.config,
            "/embeddings",
            json.dumps(request_body),
            request_headers,
            abort_signal,
            failure_label="embedding",
            logger=self.logger,
            model_id=self.model_id,
        )

        response_body = response.json()
        response_headers = extract_response_headers(response)

        # The API answers either with a bare list of items or with {data, usage}
        if isinstance(response_body, list):
            items = [EmbeddingItem.model_validate(item) for item in response_body]
            embeddings = [item.embedding for item in items]
            usage = None
        else:
            parsed = EmbeddingApiResponse.model_validate(response_body)
            embeddings = [item.embedding for item in parsed.data or []]
            usage = None
            if parsed.usage is not None:
                tokens = parsed.usage.total_tokens
                if tokens is None:
                    tokens = parsed.usage.prompt_tokens
                usage = EmbeddingUsage(tokens=tokens if tokens is not None else 0)

        return EmbeddingResult(
            embeddings=embeddings,
            usage=usage,
            warnings=[],
            response=EmbeddingResponseInfo(headers=response_headers, body=response_body),
        )
