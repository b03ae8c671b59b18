import json

import pytest
import requests

from quake_feed_api.cli import main
from quake_feed_api.client import QuakeFeedAPI


LIMA = {"location": "Lima", "magnitude": 5.8, "timeGMT": "2023-11-14 22:12:20"}


def make_response(status_code, payload=None, text=None, url="http://quakes.test/"):
    response = requests.Response()
    response.status_code = status_code
    response.url = url
    response.encoding = "utf-8"
    if payload is not None:
        response._content = json.dumps(payload).encode("utf-8")
    else:
        response._content = (text or "").encode("utf-8")
    return response


class StubSession:
    """Stands in for ``requests.Session``; records every call."""

    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.calls = []

    def request(self, method, url, timeout=None, **kwargs):
        self.calls.append((method, url, timeout))
        if self.exc is not None:
            raise self.exc
        return self.response


def test_latest_hits_versioned_route():
    session = StubSession(make_response(200, LIMA))
    api = QuakeFeedAPI(base_url="http://quakes.test/", session=session, timeout=3)

    data, error = api.latest()

    assert error is None
    assert data == LIMA
    assert session.calls == [("GET", "http://quakes.test/api/v1/earthquake/latest", 3)]


def test_bigger_than_formats_threshold_in_path():
    session = StubSession(make_response(200, [LIMA]))
    api = QuakeFeedAPI(base_url="http://quakes.test", session=session)

    data, error = api.bigger_than(4.5)

    assert data == [LIMA]
    assert session.calls[0][1] == "http://quakes.test/api/v1/earthquake/biggerthan/4.5"


def test_custom_prefix_targets_unversioned_routes():
    session = StubSession(make_response(200, LIMA))
    QuakeFeedAPI(base_url="http://quakes.test", prefix="/earthquake", session=session).biggest()
    assert session.calls[0][1] == "http://quakes.test/earthquake/biggest"


def test_error_detail_is_reported():
    session = StubSession(make_response(404, {"detail": "No earthquakes recorded today."}))
    data, error = QuakeFeedAPI(base_url="http://quakes.test", session=session).biggest()
    assert data is None
    assert error == {"status_code": 404, "message": "No earthquakes recorded today."}


def test_non_json_error_body_falls_back_to_text():
    session = StubSession(make_response(502, text="Bad Gateway"))
    _, error = QuakeFeedAPI(base_url="http://quakes.test", session=session).latest()
    assert error == {"status_code": 502, "message": "Bad Gateway"}


def test_transport_failure_has_no_status():
    session = StubSession(exc=requests.ConnectionError("refused"))
    _, error = QuakeFeedAPI(base_url="http://quakes.test", session=session).latest()
    assert error["status_code"] is None
    assert "refused" in error["message"]


def test_cli_prints_json(capsys):
    api = QuakeFeedAPI(base_url="http://quakes.test", session=StubSession(make_response(200, [LIMA])))
    assert main(["biggerthan", "4.5"], api=api) == 0
    assert json.loads(capsys.readouterr().out) == [LIMA]


def test_cli_reports_errors_on_stderr(capsys):
    session = StubSession(make_response(404, {"detail": "No earthquakes found above magnitude 9.0."}))
    api = QuakeFeedAPI(base_url="http://quakes.test", session=session)
    assert main(["biggerthan", "9"], api=api) == 1
    assert "[404] No earthquakes found above magnitude 9.0." in capsys.readouterr().err


def test_cli_requires_a_command():
    with pytest.raises(SystemExit):
        main([])
