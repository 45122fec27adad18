import json
from dataclasses import dataclass, field
from typing import Any, Dict

import requests

from fluenthttp.core.errors import NormalizationError, RequestTimeoutError, TransportError
from fluenthttp.http.client.request import Method


@dataclass(frozen=True)
class Response:
    method: Method
    url: str
    status: int
    body: bytes
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status < 400

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    def json(self) -> Any:
        return json.loads(self.body)


def _wrap_transport_error(exc: Exception) -> TransportError:
    if isinstance(exc, requests.Timeout):
        return RequestTimeoutError(str(exc) or "request timed out")
    return TransportError(str(exc) or type(exc).__name__)


def build_response(
    method: Method,
    raw: requests.Response | None,
    error: Exception | None = None,
) -> Response:
    """
    Collapse the transport's outcome into a ``Response`` or an exception.

    ``error`` wins over ``raw`` when both are present. The body is read
    to completion here.
    """
    if error is not None:
        raise _wrap_transport_error(error) from error

    if raw is None:
        raise NormalizationError("transport returned no response")

    try:
        body = raw.content
    except requests.RequestException as exc:
        raise _wrap_transport_error(exc) from exc

    return Response(
        method=method,
        url=raw.url,
        status=raw.status_code,
        body=body or b"",
        headers=dict(raw.headers),
    )
