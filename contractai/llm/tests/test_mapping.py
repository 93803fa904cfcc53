"""Exception mapping tests. Map by class name."""
from contractai.llm.client_litellm import _map_exception
from contractai.llm.errors import ErrorClass, LLMRateLimited


def test_map_timeout() -> None:
    """APITimeoutError / Timeout -> LLMTimeout (mapping uses type name)."""
    class APITimeoutError(Exception):
        pass
    out = _map_exception(APITimeoutError("timeout"), "gpt-4")
    assert type(out).__name__ == "LLMTimeout"
    assert out.retryable is True
    assert out.error_class == ErrorClass.TRANSIENT
    assert out.model == "gpt-4"
    assert "APITimeoutError" in out.details


def test_map_rate_limit() -> None:
    """RateLimitError -> LLMRateLimited, classified separately from transient errors."""
    class RateLimitError(Exception):
        pass
    out = _map_exception(RateLimitError("Rate limit reached: TPM"), "gpt-4")
    assert isinstance(out, LLMRateLimited)
    assert out.error_class == ErrorClass.RATE_LIMITED


def test_map_status_429_without_known_class() -> None:
    class ProviderError(Exception):
        status_code = 429
    out = _map_exception(ProviderError("slow down"), "gpt-4")
    assert out.error_class == ErrorClass.RATE_LIMITED


def test_map_auth_error() -> None:
    """AuthenticationError -> LLMAuthError."""
    class AuthenticationError(Exception):
        pass
    out = _map_exception(AuthenticationError("invalid key"), "gpt-4")
    assert type(out).__name__ == "LLMAuthError"
    assert out.error_class == ErrorClass.TRANSIENT


def test_map_bad_request() -> None:
    """BadRequestError -> LLMBadRequest."""
    class BadRequestError(Exception):
        pass
    out = _map_exception(BadRequestError("bad params"), "gpt-4")
    assert type(out).__name__ == "LLMBadRequest"
    assert out.retryable is False


def test_map_connection_error_is_transient() -> None:
    class APIConnectionError(Exception):
        pass
    out = _map_exception(APIConnectionError("reset by peer"), "gpt-4")
    assert out.code == "UNAVAILABLE"
    assert out.error_class == ErrorClass.TRANSIENT


def test_map_5xx_status_is_transient() -> None:
    class Boom(Exception):
        status_code = 503
    out = _map_exception(Boom("upstream"), "gpt-4")
    assert out.code == "UNAVAILABLE"


def test_map_unknown_exception_is_transient() -> None:
    """Unrecognised exceptions (e.g. a closed event loop inside the SDK) are retried."""
    out = _map_exception(RuntimeError("Event loop is closed"), "gpt-4")
    assert out.code == "UNAVAILABLE"
    assert out.error_class == ErrorClass.TRANSIENT
    assert "RuntimeError" in out.details
    assert "Event loop is closed" in str(out)
