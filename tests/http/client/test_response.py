import pytest
import requests
from requests.structures import CaseInsensitiveDict

from fluenthttp.core.errors import NormalizationError, RequestTimeoutError, TransportError
from fluenthttp.http.client.request import Method
from fluenthttp.http.client.response import Response, build_response


def _raw(status=200, body=b"ok", headers=None):
    raw = requests.Response()
    raw.status_code = status
    raw._content = body
    raw.headers = CaseInsensitiveDict(headers or {})
    raw.url = "http://x.test/api"
    return raw


class BrokenBodyResponse(requests.Response):
    @property
    def content(self):
        raise requests.exceptions.ChunkedEncodingError("connection broken")


def test_build_response_reads_everything():
    resp = build_response(Method.GET, _raw(404, b"missing", {"X-A": "1"}))

    assert resp == Response(Method.GET, "http://x.test/api", 404, b"missing", {"X-A": "1"})
    assert not resp.ok
    assert resp.text == "missing"


def test_error_wins_over_response():
    with pytest.raises(TransportError):
        build_response(Method.GET, _raw(), requests.ConnectionError("reset"))


def test_timeout_error_kind():
    with pytest.raises(RequestTimeoutError):
        build_response(Method.GET, None, requests.ConnectTimeout("slow"))


def test_absent_response_without_error():
    with pytest.raises(NormalizationError):
        build_response(Method.GET, None)


def test_body_read_failure_is_a_transport_error():
    raw = BrokenBodyResponse()
    raw.status_code = 200
    raw.url = "http://x.test/api"

    with pytest.raises(TransportError) as excinfo:
        build_response(Method.GET, raw)
    assert isinstance(excinfo.value.__cause__, requests.exceptions.ChunkedEncodingError)


def test_response_is_immutable():
    resp = build_response(Method.GET, _raw())
    with pytest.raises(AttributeError):
        resp.status = 500


def test_text_replaces_undecodable_bytes():
    resp = build_response(Method.GET, _raw(body=b"\xffok"))
    assert resp.text == "�ok"
