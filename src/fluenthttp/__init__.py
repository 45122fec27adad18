from .core.errors import (
    ClientConsumedError,
    EncodingError,
    FluentHTTPError,
    InvalidHeaderError,
    NormalizationError,
    RequestTimeoutError,
    SerializationError,
    TransportError,
    UnsupportedContentTypeError,
    UnsupportedMethodError,
    URLParseError,
)
from .http.client.client import Client, new
from .http.client.request import ContentType, Cookie, Method
from .http.client.response import Response
from .util.logging import configure_logging

__all__ = [
    'Client',
    'new',
    'ContentType',
    'Cookie',
    'Method',
    'Response',
    'configure_logging',
    'FluentHTTPError',
    'EncodingError',
    'URLParseError',
    'SerializationError',
    'UnsupportedMethodError',
    'UnsupportedContentTypeError',
    'InvalidHeaderError',
    'TransportError',
    'RequestTimeoutError',
    'NormalizationError',
    'ClientConsumedError',
]
