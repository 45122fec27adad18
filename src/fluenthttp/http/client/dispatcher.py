import threading
import time
from typing import Dict, Iterable, Protocol

import requests
from requests.exceptions import InvalidHeader, InvalidSchema, InvalidURL, MissingSchema

from fluenthttp.core.errors import (
    InvalidHeaderError,
    RequestTimeoutError,
    URLParseError,
)
from fluenthttp.http.client.encoder import EncodedRequest
from fluenthttp.http.client.request import Cookie, Method
from fluenthttp.http.client.response import Response, build_response
from fluenthttp.util.logging import get_logger

log = get_logger(__name__)

CHUNK_SIZE = 8192

# RFC 6265 token separators; never valid in a cookie name
_NAME_SEPARATORS = frozenset('()<>@,;:\\"/[]?={} \t')
_VALUE_FORBIDDEN = frozenset('";\\')


class Transport(Protocol):
    def send(self, request: requests.PreparedRequest, **kwargs) -> requests.Response: ...


def sanitize_cookie_name(name: str) -> str:
    name = name.replace("\r", "-").replace("\n", "-")
    return "".join(ch for ch in name if 0x20 < ord(ch) < 0x7f and ch not in _NAME_SEPARATORS)


def sanitize_cookie_value(value: str) -> str:
    """Drop bytes a cookie value may not carry; quote values with a space or comma."""
    value = "".join(ch for ch in value if 0x20 <= ord(ch) < 0x7f and ch not in _VALUE_FORBIDDEN)
    if " " in value or "," in value:
        return f'"{value}"'
    return value


def cookie_header(cookies: Iterable[Cookie], existing: str | None = None) -> str | None:
    """Join cookies into one Cookie header value, keeping their order."""
    pairs = []
    for c in cookies:
        name = sanitize_cookie_name(c.name)
        if not name:
            log.warning("dropping cookie with invalid name", extra={"cookie": repr(c.name)})
            continue
        pairs.append(f"{name}={sanitize_cookie_value(c.value)}")
    if existing:
        pairs.insert(0, existing)
    return "; ".join(pairs) or None


def read_body(raw: requests.Response, deadline: float | None) -> bytes:
    """Read the streamed body to completion, giving up once ``deadline`` passes."""
    chunks = []
    try:
        for chunk in raw.iter_content(CHUNK_SIZE):
            if deadline is not None and time.monotonic() > deadline:
                raise RequestTimeoutError("response body not received within timeout")
            chunks.append(chunk)
    finally:
        raw.close()
    # same cache requests.Response.content fills
    raw._content = b"".join(chunks)
    return raw._content


class Dispatcher:
    """
    Send one encoded request over a transport.

    ``transport`` is anything with ``requests.Session.send``'s signature.
    Without one, a fresh ``requests.Session`` is opened for the call and
    closed afterwards.

    The timeout bounds the whole exchange: connect, send and reading the
    full body. ``requests`` only bounds each connect and socket read, so
    the exchange runs on a daemon thread and the caller stops waiting at
    the deadline. A timeout of zero or less means no limit.
    """

    def __init__(self, transport: Transport | None = None):
        self.transport = transport

    def prepare(
        self,
        method: Method,
        encoded: EncodedRequest,
        headers: Dict[str, str],
        cookies: Iterable[Cookie] = (),
    ) -> requests.PreparedRequest:
        try:
            prepared = requests.Request(
                method=method.value,
                url=encoded.url,
                headers=dict(headers),
                data=encoded.body,
            ).prepare()
        except (InvalidURL, InvalidSchema, MissingSchema) as exc:
            raise URLParseError(encoded.url, str(exc)) from exc
        except InvalidHeader as exc:
            raise InvalidHeaderError(str(exc)) from exc

        cookie = cookie_header(cookies, prepared.headers.get("Cookie"))
        if cookie:
            prepared.headers["Cookie"] = cookie
        return prepared

    @staticmethod
    def _roundtrip(transport, prepared, timeout, deadline, outcome: dict) -> None:
        raw = transport.send(prepared, timeout=timeout, stream=True)
        outcome["raw"] = raw
        if raw is not None:
            read_body(raw, deadline)

    def _exchange(self, prepared, timeout, deadline, outcome: dict) -> None:
        try:
            if self.transport is not None:
                self._roundtrip(self.transport, prepared, timeout, deadline, outcome)
            else:
                with requests.Session() as session:
                    self._roundtrip(session, prepared, timeout, deadline, outcome)
        except Exception as exc:
            # re-raised on the calling thread by dispatch()
            outcome["error"] = exc

    def dispatch(
        self,
        method: Method,
        encoded: EncodedRequest,
        headers: Dict[str, str],
        cookies: Iterable[Cookie] = (),
        timeout: float | None = None,
    ) -> Response:
        prepared = self.prepare(method, encoded, headers, cookies)
        ctx = {"method": method.value, "url": prepared.url}

        if timeout is not None and timeout <= 0:
            timeout = None
        deadline = time.monotonic() + timeout if timeout is not None else None

        log.debug("dispatching", extra={**ctx, "timeout": timeout})
        outcome = {}
        worker = threading.Thread(
            target=self._exchange,
            args=(prepared, timeout, deadline, outcome),
            name="fluenthttp-exchange",
            daemon=True,
        )
        worker.start()
        worker.join(timeout)

        if worker.is_alive():
            raw = outcome.get("raw")
            if raw is not None:
                raw.close()
            log.warning("timed out", extra={**ctx, "timeout": timeout})
            raise RequestTimeoutError(f"no complete response within {timeout}s")

        error = outcome.get("error")
        if error is not None:
            log.warning("transport error", extra=ctx, exc_info=error)
            if not isinstance(error, requests.RequestException):
                raise error

        response = build_response(method, outcome.get("raw"), error)
        log.debug("response received", extra={**ctx, "status": response.status,
                                              "size": len(response.body)})
        return response
