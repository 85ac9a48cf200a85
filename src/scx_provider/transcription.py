"""
Transcription model for the SCX /transcriptions endpoint.
"""

import asyncio
import base64
import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union

from ._http import combine_headers, extract_response_headers, post_json
from ._wire import TranscriptionApiResponse
from .config import ProviderConfig
from .interfaces import (
    Headers,
    RequestInfo,
    TranscriptionResponseInfo,
    TranscriptionResult,
    TranscriptionSegment,
)


def encode_audio(audio: Union[bytes, bytearray, memoryview, str]) -> str:
    """Base64-encode raw audio; text is assumed to be encoded already."""
    if isinstance(audio, (bytes, bytearray, memoryview)):
        return base64.b64encode(bytes(audio)).decode("ascii")
    return audio


class ScxTranscriptionModel:
    """Translates transcription calls into one POST /transcriptions request."""

    specification_version = "v3"

    def __init__(self, model_id: str, config: ProviderConfig):
        self.model_id = model_id
        self.provider = config.provider
        self.config = config
        self.logger = logging.getLogger("scx.transcription")

    async def do_generate(self, audio: Union[bytes, bytearray, memoryview, str], media_type: str,
                          provider_options: Optional[Dict[str, Dict[str, Any]]] = None,
                          headers: Optional[Headers] = None,
                          abort_signal: Optional[asyncio.Event] = None) -> TranscriptionResult:
        """Transcribe one audio payload.

        Keys in provider_options["scx"] are merged into the request body last,
        so they win over model, audio and media_type.
        """
        request_body: Dict[str, Any] = {
            "model": self.model_id,
            "audio": encode_audio(audio),
            "media_type": media_type,
        }

        scx_options = (provider_options or {}).get("scx")
        if scx_options:
            request_body.update(scx_options)

        body_string = json.dumps(request_body)
        request_headers = combine_headers(self.config.headers(), headers)

        response = await post_json(
            self.config,
            "/transcriptions",
            body_string,
            request_headers,
            abort_signal,
            failure_label="transcription",
            logger=self.logger,
            model_id=self.model_id,
        )

        response_body = response.json()
        response_headers = extract_response_headers(response)
        parsed = TranscriptionApiResponse.model_validate(response_body)

        segments = [
            TranscriptionSegment(text=seg.text, start_second=seg.start, end_second=seg.end)
            for seg in parsed.segments or []
        ]

        return TranscriptionResult(
            text=parsed.text if parsed.text is not None else "",
            segments=segments,
            language=parsed.language,
            duration_in_seconds=parsed.duration,
            warnings=[],
            request=RequestInfo(body=body_string),
            response=TranscriptionResponseInfo(
                timestamp=datetime.now(timezone.utc),
                model_id=self.model_id,
                headers=response_headers,
                body=response_body,
            ),
        )
