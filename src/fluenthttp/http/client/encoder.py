"""
Turn a request's method, content type and params into the URL to call
and the body to send.

GET and DELETE carry params in the query string. POST, PUT and PATCH
carry them in the body, serialized according to the content type. Keys
are always written in sorted order so the same params produce the same
bytes on every run.
"""
import json
from dataclasses import dataclass
from typing import Mapping
from urllib.parse import quote, urlencode, urlsplit, urlunsplit

from fluenthttp.core.errors import (
    SerializationError,
    UnsupportedContentTypeError,
    UnsupportedMethodError,
    URLParseError,
)
from fluenthttp.http.client.request import (
    BODY_METHODS,
    QUERY_METHODS,
    ContentType,
    Method,
    Request,
)


@dataclass(frozen=True)
class EncodedRequest:
    url: str
    body: bytes | None = None


def encode_params(params: Mapping[str, str]) -> str:
    """URL-encode params sorted by key; spaces become %20."""
    return urlencode(sorted(params.items()), quote_via=quote)


def encode_query(url: str, params: Mapping[str, str]) -> str:
    """Replace the query component of ``url`` with the encoded params."""
    try:
        parts = urlsplit(url)
        # urlsplit is lazy about ports; touching it validates them
        parts.port
    except ValueError as exc:
        raise URLParseError(url, str(exc)) from exc
    return urlunsplit(parts._replace(query=encode_params(params)))


def encode_body(content_type, params: Mapping[str, str]) -> bytes:
    if content_type == ContentType.JSON:
        try:
            payload = json.dumps(
                dict(params), sort_keys=True, separators=(",", ":"), ensure_ascii=False
            )
        except (TypeError, ValueError) as exc:
            raise SerializationError(f"cannot serialize params as JSON: {exc}") from exc
        return payload.encode("utf-8")

    if content_type == ContentType.FORM:
        try:
            return encode_params(params).encode("utf-8")
        except TypeError as exc:
            raise SerializationError(f"cannot serialize params as form data: {exc}") from exc

    raise UnsupportedContentTypeError(content_type)


def encode(request: Request) -> EncodedRequest:
    method = request.method
    if method in QUERY_METHODS:
        return EncodedRequest(encode_query(request.url, request.params))

    if method in BODY_METHODS:
        # request.body is never consulted, with or without params
        if not request.params:
            return EncodedRequest(request.url)
        return EncodedRequest(request.url, encode_body(request.content_type, request.params))

    raise UnsupportedMethodError(method)
