from datetime import timedelta
from typing import Iterable, Mapping, Tuple

from fluenthttp.core.errors import ClientConsumedError, EncodingError
from fluenthttp.http.client.dispatcher import Dispatcher, Transport
from fluenthttp.http.client.encoder import encode
from fluenthttp.http.client.request import ContentType, Cookie, Method, Request
from fluenthttp.http.client.response import Response
from fluenthttp.util.logging import get_logger

log = get_logger(__name__)


def _as_cookie(cookie: Cookie | Tuple[str, str]) -> Cookie:
    if isinstance(cookie, Cookie):
        return cookie
    return Cookie(*cookie)


class Client:
    """
    Fluent builder for a single HTTP request.

    Every mutator changes one thing and returns the client, so calls
    chain. One terminal verb (``get``, ``post``, ``put``, ``patch``,
    ``delete``) encodes the params, sends the request and returns a
    ``Response``; failures are raised as ``FluentHTTPError`` subclasses.

    A client dispatches once. Calling a second terminal verb raises
    ``ClientConsumedError``.

    Example:
        >>> resp = Client("http://x.test/api").add_param("q", "a b").get()
    """

    def __init__(self, url: str, transport: Transport | None = None):
        self.request = Request(url)
        self._dispatcher = Dispatcher(transport)
        self._consumed = False
        # a new client carries the Content-Type header of its default type
        self.set_content_type(self.request.content_type)

    def __repr__(self):
        return f"<Client {self.request.method or '-'} {self.request.url}>"

    # -- mutators -----------------------------------------------------------

    def set_headers(self, headers: Mapping[str, str]) -> "Client":
        self.request.headers = dict(headers)
        return self

    def add_header(self, key: str, value: str) -> "Client":
        self.request.headers[key] = value
        return self

    def set_content_type(self, content_type: ContentType | str) -> "Client":
        """
        Set the body encoding for POST/PUT/PATCH.

        JSON and FORM also write the matching Content-Type header. Any
        other value is stored without touching headers, and makes
        encoding a non-empty body fail later.
        """
        try:
            content_type = ContentType(content_type)
        except ValueError:
            pass
        else:
            self.request.headers["Content-Type"] = content_type.value
        self.request.content_type = content_type
        return self

    def add_param(self, key: str, value: str) -> "Client":
        self.request.params[key] = value
        return self

    def set_cookies(self, cookies: Iterable[Cookie | Tuple[str, str]]) -> "Client":
        self.request.cookies = [_as_cookie(c) for c in cookies]
        return self

    def set_timeout(self, timeout: timedelta | float) -> "Client":
        self.request.timeout = timeout
        return self

    def set_body(self, body: str) -> "Client":
        # Stored only. The encoder never sends it, params or not.
        self.request.body = body
        return self

    # -- terminal verbs -----------------------------------------------------

    def get(self) -> Response:
        return self._send(Method.GET)

    def post(self) -> Response:
        return self._send(Method.POST)

    def put(self) -> Response:
        return self._send(Method.PUT)

    def patch(self) -> Response:
        return self._send(Method.PATCH)

    def delete(self) -> Response:
        return self._send(Method.DELETE)

    def _send(self, method: Method) -> Response:
        if self._consumed:
            raise ClientConsumedError(
                f"client for {self.request.url} already dispatched {self.request.method.value}"
            )
        self._consumed = True
        self.request.method = method

        try:
            encoded = encode(self.request)
        except EncodingError as exc:
            log.error(str(exc), extra={"method": method.value, "url": self.request.url})
            raise

        return self._dispatcher.dispatch(
            method,
            encoded,
            self.request.headers,
            self.request.cookies,
            timeout=self.request.timeout_seconds,
        )


def new(url: str, transport: Transport | None = None) -> Client:
    """Create a client for ``url`` with default timeout and JSON content type."""
    return Client(url, transport)
