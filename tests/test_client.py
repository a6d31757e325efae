# ===============================================
# tests/test_client.py
# -----------------------------------------------
# SalesNavClient against a stubbed requests.Session.
# ===============================================

from dataclasses import replace
from unittest.mock import MagicMock

import pytest

from salesnav.client import SalesNavAPIError, SalesNavClient, request_payload
from tests.conftest import SAMPLE_TOKEN, SAMPLE_URL


def _response(status_code, body):
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = body
    return resp


def _client(resp):
    session = MagicMock()
    session.post.return_value = resp
    session.get.return_value = resp
    return SalesNavClient(base_url="http://api.test/", timeout=5, session=session), session


def test_extract_session_posts_url():
    body = {"success": True, "sessionId": SAMPLE_TOKEN, "decodedSessionId": "x=="}
    client, session = _client(_response(200, body))
    assert client.extract_session(SAMPLE_URL) == body
    session.post.assert_called_once_with(
        "http://api.test/extract-session", json={"url": SAMPLE_URL}, timeout=5
    )


def test_generate_url_with_session_payload(sample_request):
    client, session = _client(_response(200, {"success": True, "url": "https://u"}))
    assert client.generate_url_with_session(sample_request) == "https://u"
    _, kwargs = session.post.call_args
    assert kwargs["json"] == {
        "searchType": "people",
        "keywords": "développeur",
        "filters": [
            {
                "type": "CURRENT_COMPANY",
                "values": [{"id": "urn:li:organization:825160", "text": "Hyundai Motor Company", "selectionType": "INCLUDED"}],
            }
        ],
        "viewAllFilters": False,
        "sessionId": SAMPLE_TOKEN,
    }


def test_payload_without_session(sample_request):
    payload = request_payload(replace(sample_request, session_token=None))
    assert "sessionId" not in payload


def test_failure_raises_api_error():
    body = {"success": False, "error": "No sessionId parameter found in the URL", "code": "missing_session"}
    client, _ = _client(_response(400, body))
    with pytest.raises(SalesNavAPIError) as exc:
        client.extract_session("https://www.linkedin.com/sales/search/people?query=(a:b)")
    assert exc.value.status_code == 400
    assert exc.value.code == "missing_session"
    assert "sessionId" in exc.value.message


def test_filter_types_uses_get():
    client, session = _client(_response(200, {"success": True, "people": [], "company": []}))
    client.filter_types()
    session.get.assert_called_once_with("http://api.test/filter-types", timeout=5)


def test_non_json_error_response():
    resp = _response(502, None)
    resp.json.side_effect = ValueError("no json")
    resp.raise_for_status.side_effect = RuntimeError("502 Bad Gateway")
    client, _ = _client(resp)
    with pytest.raises(RuntimeError):
        client.parse_url(SAMPLE_URL)


def test_non_object_json_response():
    client, _ = _client(_response(200, ["not", "an", "object"]))
    with pytest.raises(SalesNavAPIError) as exc:
        client.filter_types()
    assert exc.value.status_code == 200
    assert "list" in exc.value.message
