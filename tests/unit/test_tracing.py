"""Unit tests for debug call tracing."""

from io import StringIO

import httpx
import pytest
from rich.console import Console

from hubpull.utils.tracing import (
    PREVIEW_LENGTH,
    CallTracer,
    get_tracer,
    mask_secret,
    redact,
    set_tracer,
    truncate,
)


@pytest.fixture
def output():
    return StringIO()


@pytest.fixture
def tracer(output):
    return CallTracer(enabled=True, console=Console(file=output, width=200, color_system=None))


class TestMasking:
    """Tests for secret masking helpers."""

    def test_mask_secret(self):
        assert mask_secret("dckr_pat_abcdef") == "dckr****"
        assert mask_secret("") == ""

    def test_mask_keeps_scheme(self):
        assert mask_secret("Bearer dckr_pat_abcdef") == "Bearer dckr****"

    def test_redact_nested(self):
        data = {
            "username": "jdoe",
            "password": "dckr_pat_abcdef",
            "auth_config": {"username": "jdoe", "password": "x"},
            "items": [{"token": "session-jwt"}],
        }
        assert redact(data) == {
            "username": "jdoe",
            "password": "dckr****",
            "auth_config": "****",
            "items": [{"token": "sess****"}],
        }

    def test_truncate(self):
        text = "x" * (PREVIEW_LENGTH + 10)
        result = truncate(text)
        assert result.startswith("x" * PREVIEW_LENGTH)
        assert result.endswith(f"({PREVIEW_LENGTH + 10} chars)")
        assert truncate("short") == "short"


class TestCallTracer:
    """Tests for CallTracer output."""

    def test_disabled_prints_nothing(self, output):
        tracer = CallTracer(enabled=False, console=Console(file=output))
        tracer.engine_call("ping")
        tracer.engine_result("ping", True)
        assert output.getvalue() == ""

    def test_engine_call_masks_password(self, tracer, output):
        tracer.engine_call("login", username="jdoe", password="dckr_pat_abcdef")
        text = output.getvalue()
        assert "ENGINE login" in text
        assert "jdoe" in text
        assert "dckr_pat_abcdef" not in text
        assert "dckr****" in text

    def test_http_round_trip(self, tracer, output):
        def handler(request):
            return httpx.Response(200, json={"token": "session-jwt-value", "user": "jdoe"})

        with httpx.Client(
            transport=httpx.MockTransport(handler), event_hooks=tracer.event_hooks()
        ) as client:
            client.post(
                "https://hub.docker.com/v2/users/login",
                json={"username": "jdoe", "password": "dckr_pat_abcdef"},
                headers={"Authorization": "Bearer dckr_pat_abcdef"},
            )

        text = output.getvalue()
        assert "HTTP POST https://hub.docker.com/v2/users/login" in text
        assert "HTTP 200" in text
        assert "dckr_pat_abcdef" not in text
        assert "session-jwt-value" not in text
        assert "jdoe" in text

    def test_long_result_truncated(self, tracer, output):
        tracer.engine_result("images.list", ["nginx:latest"] * 200)
        assert "chars)" in output.getvalue()

    def test_trace_failures_are_swallowed(self, tracer):
        class Unprintable:
            def __str__(self):
                raise RuntimeError("cannot render")

        tracer.engine_result("odd", Unprintable())


class TestGlobalTracer:
    """Tests for the process-wide tracer."""

    def test_disabled_by_default(self):
        assert get_tracer().enabled is False

    def test_set_tracer(self):
        tracer = CallTracer(enabled=True)
        set_tracer(tracer)
        assert get_tracer() is tracer
        set_tracer(None)
        assert get_tracer() is not tracer
