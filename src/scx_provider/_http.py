"""
HTTP helpers shared by the SCX translators.
"""

import asyncio
import logging
from typing import Dict, Mapping, Optional

import httpx

from ._exceptions import APICallError, RequestAbortedError
from .config import ProviderConfig


def combine_headers(config_headers: Dict[str, str],
                    additional_headers: Optional[Mapping[str, Optional[str]]] = None) -> Dict[str, str]:
    """Build request headers with precedence: content type < provider < per-call.

    Per-call entries whose value is None are skipped instead of overriding.
    """
    headers = {
        "Content-Type": "application/json",
        **config_headers,
    }

    if additional_headers:
        for key, value in additional_headers.items():
            if value is not None:
                headers[key] = value

    return headers


def extract_response_headers(response: httpx.Response) -> Dict[str, str]:
    """Copy response headers keeping the casing the server used."""
    encoding = response.headers.encoding
    headers: Dict[str, str] = {}
    for raw_key, raw_value in response.headers.raw:
        key = raw_key.decode(encoding)
        value = raw_value.decode(encoding)
        if key in headers:
            headers[key] = f"{headers[key]}, {value}"
        else:
            headers[key] = value
    return headers


async def _send(client: httpx.AsyncClient, url: str, headers: Dict[str, str], body: str,
                abort_signal: Optional[asyncio.Event]) -> httpx.Response:
    if abort_signal is None:
        return await client.post(url, headers=headers, content=body)

    request_task = asyncio.ensure_future(client.post(url, headers=headers, content=body))
    abort_task = asyncio.ensure_future(abort_signal.wait())
    try:
        await asyncio.wait({request_task, abort_task}, return_when=asyncio.FIRST_COMPLETED)
        if request_task.done():
            return request_task.result()
        raise RequestAbortedError(f"Request to {url} was aborted")
    finally:
        for task in (request_task, abort_task):
            if not task.done():
                task.cancel()
        await asyncio.gather(request_task, abort_task, return_exceptions=True)


async def post_json(config: ProviderConfig, path: str, body: str, headers: Dict[str, str],
                    abort_signal: Optional[asyncio.Event], failure_label: str,
                    logger: logging.Logger, model_id: str = None) -> httpx.Response:
    """POST a serialized JSON body to {base_url}{path} and return the successful response.

    Raises:
        RequestAbortedError: abort_signal was set before the response arrived
        APICallError: the server answered with a non-2xx status
    """
    url = config.url(path)

    if abort_signal is not None and abort_signal.is_set():
        raise RequestAbortedError(f"Request to {url} was aborted before it was sent",
                                  provider=config.provider, model=model_id)

    logger.debug(f"[{config.provider}] POST {url} ({len(body)} bytes)")

    try:
        if config.http_client is not None:
            response = await _send(config.http_client, url, headers, body, abort_signal)
        else:
            async with httpx.AsyncClient(timeout=None) as client:
                response = await _send(client, url, headers, body, abort_signal)
    except RequestAbortedError as e:
        e.provider = config.provider
        e.model = model_id
        raise

    logger.debug(f"[{config.provider}] {url} -> {response.status_code}")

    if not response.is_success:
        error_text = response.text
        raise APICallError(
            f"SCX {failure_label} request failed: {response.status_code} {error_text}",
            status_code=response.status_code,
            response_body=error_text,
            url=url,
            request_body=body,
            provider=config.provider,
            model=model_id,
        )

    return response
