"""
Custom exceptions for the SCX provider.
"""


class ScxError(Exception):
    """Base class for every error raised by the SCX provider."""

    def __init__(self, message: str, provider: str = None, model: str = None):
        super().__init__(message)
        self.provider = provider
        self.model = model


class LoadAPIKeyError(ScxError):
    """No API key was passed and none could be read from the environment."""


class APICallError(ScxError):
    """The SCX API answered with a non-2xx status."""

    def __init__(self, message: str, status_code: int, response_body: str, url: str = None,
                 request_body: str = None, provider: str = None, model: str = None):
        super().__init__(message, provider=provider, model=model)
        self.status_code = status_code
        self.response_body = response_body
        self.url = url
        self.request_body = request_body

    @property
    def is_retryable(self) -> bool:
        """Whether the status usually clears on its own (timeouts, conflicts, rate limits, 5xx)."""
        return self.status_code in (408, 409, 429) or self.status_code >= 500


class RequestAbortedError(ScxError):
    """The abort signal fired before the response was received."""


class ProviderMisuseError(ScxError, TypeError):
    """The provider was used in a way it does not support."""


class NoSuchModelError(ScxError):
    """The requested model family is not offered by SCX."""

    def __init__(self, message: str, model_type: str, provider: str = None, model: str = None):
        super().__init__(message, provider=provider, model=model)
        self.model_type = model_type
