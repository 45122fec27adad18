import pytest
import requests
from requests.structures import CaseInsensitiveDict


# ------------------------
# Fake transport
# ------------------------

class FakeSession:
    """
    Stands in for requests.Session. Each .send() records the prepared
    request and pops the next queued outcome: a (status, body, headers)
    tuple, a ready-made requests.Response, or an exception to raise.
    """
    def __init__(self, outcomes=None):
        self._outcomes = list(outcomes or [(200, b"ok", {})])
        self.sent = []
        self.timeouts = []
        self.closed = False

    def send(self, prepared, timeout=None, **kwargs):
        self.sent.append(prepared)
        self.timeouts.append(timeout)
        if not self._outcomes:
            raise RuntimeError("No more fake outcomes")
        outcome = self._outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        if outcome is None:
            return None
        if isinstance(outcome, requests.Response):
            outcome.url = prepared.url
            return outcome

        status, body, headers = outcome
        resp = requests.Response()
        resp.status_code = status
        resp._content = body
        resp._content_consumed = True
        resp.headers = CaseInsensitiveDict(headers)
        resp.url = prepared.url
        resp.request = prepared
        return resp

    @property
    def last(self):
        return self.sent[-1]

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, *_):
        self.close()


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def make_session():
    return FakeSession
