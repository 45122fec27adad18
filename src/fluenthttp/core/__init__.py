from fluenthttp.core.errors import (
    EncodingError,
    FluentHTTPError,
    TransportError,
)

__all__ = [
    'FluentHTTPError',
    'EncodingError',
    'TransportError',
]
