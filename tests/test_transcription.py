"""
Test cases for the SCX transcription model.
"""

import asyncio
import base64
import json
from datetime import datetime

import httpx
import pydantic
import pytest

from scx_provider import APICallError, RequestAbortedError, TranscriptionSegment, create_scx
from scx_provider.transcription import encode_audio


def test_encode_audio_bytes_and_text():
    """Test that raw audio is base64 encoded and text passes through."""
    assert encode_audio(b"\x00\x01\x02") == base64.b64encode(b"\x00\x01\x02").decode("ascii")
    assert encode_audio(bytearray(b"abc")) == "YWJj"
    assert encode_audio(memoryview(b"abc")) == "YWJj"
    assert encode_audio("already-encoded") == "already-encoded"


@pytest.mark.unit
@pytest.mark.asyncio
class TestTranscriptionModel:
    """Test cases for ScxTranscriptionModel.do_generate."""

    async def test_request_wire_format(self, fake_api, json_handler):
        """Test the request body, URL and auth header."""
        api = fake_api(json_handler({"text": "hi"}))
        async with api.client() as client:
            provider = create_scx(api_key="test-key", http_client=client)
            await provider.transcription_model("whisper-large-v3").do_generate(b"RIFF", "audio/wav")

        request = api.last_request
        assert str(request.url) == "https://api.scx.ai/v1/transcriptions"
        assert request.headers["Authorization"] == "Bearer test-key"
        assert request.headers["Content-Type"] == "application/json"
        assert api.last_json() == {
            "model": "whisper-large-v3",
            "audio": base64.b64encode(b"RIFF").decode("ascii"),
            "media_type": "audio/wav",
        }

    async def test_provider_options_merged_last(self, fake_api, json_handler):
        """Test that scx provider options are merged into the body and win on collisions."""
        api = fake_api(json_handler({"text": ""}))
        async with api.client() as client:
            provider = create_scx(api_key="test-key", http_client=client)
            result = await provider.transcription_model("whisper-large-v3").do_generate(
                "QUJD",
                "audio/mpeg",
                provider_options={
                    "scx": {"language": "en", "media_type": "audio/mp3"},
                    "other": {"ignored": True},
                },
            )

        body = api.last_json()
        assert body["language"] == "en"
        assert body["media_type"] == "audio/mp3"
        assert body["audio"] == "QUJD"
        assert "ignored" not in body
        # The diagnostic body is exactly what went over the wire
        assert result.request.body == api.last_request.content.decode()

    async def test_segments_mapping(self, fake_api, json_handler):
        """Test that start/end map to start_second/end_second."""
        api = fake_api(json_handler({"text": "hi", "segments": [{"text": "hi", "start": 0, "end": 1.2}]}))
        async with api.client() as client:
            provider = create_scx(api_key="test-key", http_client=client)
            result = await provider.transcription_model("whisper-large-v3").do_generate(b"a", "audio/wav")

        assert result.text == "hi"
        assert result.segments == [TranscriptionSegment(text="hi", start_second=0, end_second=1.2)]

    async def test_missing_fields_default(self, fake_api, json_handler):
        """Test that absent text and segments default instead of failing."""
        api = fake_api(json_handler({}))
        async with api.client() as client:
            provider = create_scx(api_key="test-key", http_client=client)
            result = await provider.transcription_model("whisper-large-v3").do_generate(b"a", "audio/wav")

        assert result.text == ""
        assert result.segments == []
        assert result.language is None
        assert result.duration_in_seconds is None

    async def test_language_duration_and_response_info(self, fake_api, json_handler):
        """Test optional fields and the diagnostic response envelope."""
        body = {"text": "bonjour", "language": "fr", "duration": 3.5}
        api = fake_api(json_handler(body, headers={"X-Request-Id": "abc"}))
        async with api.client() as client:
            provider = create_scx(api_key="test-key", http_client=client)
            before = datetime.now().astimezone()
            result = await provider.transcription_model("whisper-large-v3").do_generate(b"a", "audio/wav")

        assert result.language == "fr"
        assert result.duration_in_seconds == 3.5
        assert result.response.model_id == "whisper-large-v3"
        assert result.response.headers["X-Request-Id"] == "abc"
        assert result.response.body == body
        assert result.response.timestamp >= before
        assert result.warnings == []

    async def test_http_error(self, fake_api):
        """Test that a non-2xx status fails with status and body text."""
        api = fake_api(lambda request: httpx.Response(400, text='{"error": "bad audio"}'))
        async with api.client() as client:
            provider = create_scx(api_key="test-key", http_client=client)
            with pytest.raises(APICallError) as exc_info:
                await provider.transcription_model("whisper-large-v3").do_generate(b"a", "audio/wav")

        assert "SCX transcription request failed: 400" in str(exc_info.value)
        assert "bad audio" in str(exc_info.value)
        assert not exc_info.value.is_retryable
        assert json.loads(exc_info.value.request_body)["model"] == "whisper-large-v3"
        assert len(api.requests) == 1

    async def test_per_call_headers(self, fake_api, json_handler):
        """Test header precedence and None dropping."""
        api = fake_api(json_handler({}))
        async with api.client() as client:
            provider = create_scx(api_key="test-key", headers={"X-Source": "config"}, http_client=client)
            await provider.transcription_model("whisper-large-v3").do_generate(
                b"a", "audio/wav", headers={"X-Source": "call", "X-Trace": None}
            )

        assert api.last_request.headers["X-Source"] == "call"
        assert "X-Trace" not in api.last_request.headers

    async def test_abort_signal(self, fake_api):
        """Test that the abort signal cancels the in-flight request."""
        async def slow_handler(request):
            await asyncio.sleep(10)
            return httpx.Response(200, json={})

        api = fake_api(slow_handler)
        abort_signal = asyncio.Event()
        async with api.client() as client:
            provider = create_scx(api_key="test-key", http_client=client)
            asyncio.get_running_loop().call_later(0.05, abort_signal.set)
            with pytest.raises(RequestAbortedError):
                await provider.transcription_model("whisper-large-v3").do_generate(
                    b"a", "audio/wav", abort_signal=abort_signal
                )

    async def test_transport_error_propagates_unchanged(self, fake_api):
        """Test that a connection failure reaches the caller as the original httpx error."""
        def refuse_connection(request):
            raise httpx.ConnectError("Connection refused", request=request)

        api = fake_api(refuse_connection)
        async with api.client() as client:
            provider = create_scx(api_key="test-key", http_client=client)
            with pytest.raises(httpx.ConnectError, match="Connection refused"):
                await provider.transcription_model("whisper-large-v3").do_generate(b"a", "audio/wav")

        assert len(api.requests) == 1

    async def test_wrongly_typed_segment_fails(self, fake_api, json_handler):
        """Test that a string segment time fails validation instead of being coerced."""
        api = fake_api(json_handler({"text": "hi", "segments": [{"text": "hi", "start": "0", "end": 1.2}]}))
        async with api.client() as client:
            provider = create_scx(api_key="test-key", http_client=client)
            with pytest.raises(pydantic.ValidationError):
                await provider.transcription_model("whisper-large-v3").do_generate(b"a", "audio/wav")
