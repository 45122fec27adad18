"""
Exceptions raised by fluenthttp.

Terminal verbs either return a ``Response`` or raise one of these. Every
layer lets its error propagate unchanged; nothing here is retried or
recovered locally.
"""


class FluentHTTPError(Exception):
    """Base class for every error fluenthttp raises."""


class EncodingError(FluentHTTPError):
    """Parameters could not be turned into a target URL and body."""


class URLParseError(EncodingError):
    def __init__(self, url: str, reason: str = ""):
        self.url = url
        msg = f"cannot parse url {url!r}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class SerializationError(EncodingError):
    """The request body could not be serialized."""


class UnsupportedMethodError(EncodingError):
    def __init__(self, method):
        self.method = method
        super().__init__(f"unsupported method: {method!r}")


class UnsupportedContentTypeError(EncodingError):
    def __init__(self, content_type):
        self.content_type = content_type
        super().__init__(f"unsupported Content-Type: {content_type!r}")


class InvalidHeaderError(FluentHTTPError):
    """A header name or value cannot be put on the wire."""


class TransportError(FluentHTTPError):
    """The transport failed to complete the exchange.

    The original transport exception is chained as ``__cause__``.
    """


class RequestTimeoutError(TransportError):
    """The exchange did not finish within the configured timeout."""


class NormalizationError(FluentHTTPError):
    """The transport returned without a usable response object."""


class ClientConsumedError(FluentHTTPError):
    """A terminal verb was called on a configuration that already dispatched."""
