"""Tests for the HTTP client and its decode step."""

from unittest.mock import MagicMock

import pytest
import requests

from portal.client.api_client import PortalAPIError, PortalClient, decode_submission
from portal.models.enums import BudgetRange, ProjectStatus, UserRole

RAW_SUBMISSION = {
    "id": 7,
    "clientName": "Kari",
    "companyName": "",
    "email": "kari@fjord.no",
    "projectDescription": "Nettside",
    "timeline": "",
    "budget": "range1_10kNOK",
    "status": {"__kind__": "followup"},
    "statusComment": None,
    "deliveryLink": None,
    "deliveryDescription": None,
    "files": [],
    "submittedBy": None,
    "timestamp": "2026-01-01T12:00:00Z",
    "messages": [],
}


def response(status_code=200, body=None):
    resp = MagicMock()
    resp.status_code = status_code
    resp.ok = status_code < 400
    resp.json.return_value = body if body is not None else {}
    return resp


@pytest.fixture
def http():
    session = MagicMock()
    session.headers = {}
    return session


@pytest.fixture
def api(http):
    return PortalClient("https://portal.example/", token="tok", session=http)


def test_decode_submission():
    decoded = decode_submission(RAW_SUBMISSION)
    assert decoded["status"] is ProjectStatus.FOLLOWUP
    assert decoded["budget"] is BudgetRange.RANGE_1_10K


def test_bearer_token_header(api, http):
    assert http.headers["Authorization"] == "Bearer tok"


def test_set_status_request(api, http):
    http.request.return_value = response(body={"submission": dict(RAW_SUBMISSION, status="completed")})

    result = api.set_status(7, ProjectStatus.COMPLETED, "Levert")

    http.request.assert_called_once()
    method, url = http.request.call_args.args
    assert method == "PATCH"
    assert url == "https://portal.example/api/v1/admin/submissions/7/status"
    assert http.request.call_args.kwargs["json"] == {"status": "completed", "comment": "Levert"}
    assert result["status"] is ProjectStatus.COMPLETED


def test_grouped_messages(api, http):
    http.request.return_value = response(body={"messages": [{"projectId": 3, "messages": [{"text": "hei"}]}]})
    assert api.get_all_messages() == [(3, [{"text": "hei"}])]


def test_error_envelope(api, http):
    http.request.return_value = response(
        409, {"error": {"code": "INVALID_STATE", "message": "not completed", "details": {}}}
    )

    with pytest.raises(PortalAPIError) as exc:
        api.add_delivery_link(7, "https://x", "y")

    assert exc.value.status_code == 409
    assert exc.value.code == "INVALID_STATE"


def test_network_error(api, http):
    http.request.side_effect = requests.ConnectionError("refused")
    with pytest.raises(PortalAPIError):
        api.get_user_projects()


def test_role(api, http):
    http.request.return_value = response(body={"role": "guest"})
    assert api.get_caller_user_role() is UserRole.GUEST


def test_submit_project_payload(api, http):
    http.request.return_value = response(201, {"projectId": 1, "timestamp": "2026-01-01T12:00:00Z"})

    api.submit_project({"clientName": "Kari", "email": "k@f.no", "projectDescription": "x",
                        "budget": BudgetRange.RANGE_100K_PLUS})

    payload = http.request.call_args.kwargs["json"]
    assert payload["budget"] == "range100kPlusNOK"
    assert payload["companyName"] == ""
