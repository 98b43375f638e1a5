"""Echo of external calls for debug mode.

When enabled, every registry HTTP request and every local engine call is
printed with its parameters before it is issued, followed by a truncated
view of what came back. Tracing is observational only: it never alters
the request and never raises into the caller.
"""

from __future__ import annotations

import json
from typing import Any

import httpx
from rich.console import Console
from rich.markup import escape

from hubpull.utils.logging import get_logger

logger = get_logger(__name__)

PREVIEW_LENGTH = 500
SECRET_PREFIX_LENGTH = 4
SENSITIVE_KEYS = {"authorization", "password", "token", "auth_config", "secret"}


def mask_secret(value: str) -> str:
    """Mask a secret, keeping a short prefix for recognition.

    Args:
        value: Secret value

    Returns:
        Masked representation
    """
    if not value:
        return ""
    if " " in value:
        # "Bearer xyz" / "JWT xyz" / "Basic xyz": keep the scheme visible
        scheme, _, rest = value.partition(" ")
        return f"{scheme} {mask_secret(rest)}"
    return value[:SECRET_PREFIX_LENGTH] + "****"


def redact(data: Any) -> Any:
    """Recursively mask sensitive fields in a mapping or list."""
    if isinstance(data, dict):
        result = {}
        for key, value in data.items():
            if str(key).lower() in SENSITIVE_KEYS:
                result[key] = mask_secret(value) if isinstance(value, str) else "****"
            else:
                result[key] = redact(value)
        return result
    if isinstance(data, (list, tuple)):
        return [redact(item) for item in data]
    return data


def truncate(text: str, length: int = PREVIEW_LENGTH) -> str:
    """Shorten text for display."""
    if len(text) <= length:
        return text
    return f"{text[:length]}... ({len(text)} chars)"


class CallTracer:
    """Echoes external calls to the console when debug mode is on.

    Example:
        tracer = CallTracer(enabled=True)
        client = httpx.Client(event_hooks=tracer.event_hooks())
        tracer.engine_call("pull", repository="nginx", tag="latest")
    """

    def __init__(self, enabled: bool = False, console: Console | None = None) -> None:
        self._enabled = enabled
        self._console = console or Console(stderr=True)

    @property
    def enabled(self) -> bool:
        """Whether tracing is enabled."""
        return self._enabled

    def event_hooks(self) -> dict[str, list[Any]]:
        """Get httpx event hooks that echo requests and responses."""
        return {"request": [self.on_request], "response": [self.on_response]}

    def on_request(self, request: httpx.Request) -> None:
        if not self._enabled:
            return
        try:
            headers = redact({k: v for k, v in request.headers.items() if k.lower() != "host"})
            lines = [f"[DEBUG] HTTP {request.method} {request.url}"]
            if request.url.params:
                lines.append(f"        params: {dict(request.url.params)}")
            lines.append(f"        headers: {headers}")
            body = request.content
            if body:
                lines.append(f"        body: {self._format_body(body)}")
            self._echo("\n".join(lines))
        except Exception as e:
            logger.debug(f"Failed to trace request: {e}")

    def on_response(self, response: httpx.Response) -> None:
        if not self._enabled:
            return
        try:
            response.read()
            self._echo(
                f"[DEBUG] HTTP {response.status_code} <- {response.request.url}\n"
                f"        response: {truncate(self._mask_response(response.text))}"
            )
        except Exception as e:
            logger.debug(f"Failed to trace response: {e}")

    def engine_call(self, operation: str, **params: Any) -> None:
        """Echo a local engine call before it runs."""
        if not self._enabled:
            return
        try:
            self._echo(f"[DEBUG] ENGINE {operation} {redact(params)}")
        except Exception as e:
            logger.debug(f"Failed to trace engine call: {e}")

    def engine_result(self, operation: str, result: Any) -> None:
        """Echo a truncated local engine result."""
        if not self._enabled:
            return
        try:
            self._echo(f"[DEBUG] ENGINE {operation} -> {truncate(str(redact(result)))}")
        except Exception as e:
            logger.debug(f"Failed to trace engine result: {e}")

    def _format_body(self, body: bytes) -> str:
        text = body.decode("utf-8", errors="replace")
        try:
            return json.dumps(redact(json.loads(text)))
        except ValueError:
            return truncate(text)

    def _mask_response(self, text: str) -> str:
        try:
            return json.dumps(redact(json.loads(text)))
        except ValueError:
            return text

    def _echo(self, text: str) -> None:
        self._console.print(f"[dim]{escape(text)}[/dim]", highlight=False)


# Global tracer instance
_tracer: CallTracer | None = None


def get_tracer() -> CallTracer:
    """Get the process-wide tracer, disabled until configured."""
    global _tracer
    if _tracer is None:
        _tracer = CallTracer(enabled=False)
    return _tracer


def set_tracer(tracer: CallTracer | None) -> None:
    """Set the process-wide tracer.

    Args:
        tracer: Tracer to install, or None to reset to a disabled tracer
    """
    global _tracer
    _tracer = tracer
