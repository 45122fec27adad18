from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import Dict, List

from fluenthttp.settings import CLIENT_SETTINGS

DEFAULT_TIMEOUT = timedelta(seconds=CLIENT_SETTINGS.timeout)


class Method(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


class ContentType(str, Enum):
    JSON = "application/json"
    FORM = "application/x-www-form-urlencoded"


DEFAULT_CONTENT_TYPE = ContentType(CLIENT_SETTINGS.content_type)

QUERY_METHODS = frozenset({Method.GET, Method.DELETE})
BODY_METHODS = frozenset({Method.POST, Method.PUT, Method.PATCH})


@dataclass
class Cookie:
    name: str
    value: str
    # path, domain, expires... stored for the caller, never sent
    attributes: Dict[str, str] = field(default_factory=dict)


@dataclass
class Request:
    """
    Everything accumulated for one pending request.

    Plain storage: the mutators live on ``Client``, encoding lives in
    ``encoder``. ``body`` is kept apart from ``params`` and is not read
    by the encoder.
    """
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    cookies: List[Cookie] = field(default_factory=list)
    timeout: timedelta | float = DEFAULT_TIMEOUT
    params: Dict[str, str] = field(default_factory=dict)
    content_type: ContentType | str = DEFAULT_CONTENT_TYPE
    method: Method | None = None
    body: str = ""

    @property
    def timeout_seconds(self) -> float:
        if isinstance(self.timeout, timedelta):
            return self.timeout.total_seconds()
        return float(self.timeout)
