"""Tests for admin status transitions."""

from unittest.mock import patch

import pytest

from portal.extensions import db
from portal.models.submission import ProjectSubmission

TARGETS = ["reviewed", "followup", "inProgress", "completed"]


def set_status(client, headers, submission_id, payload):
    return client.patch(
        f"/api/v1/admin/submissions/{submission_id}/status",
        json=payload,
        headers=headers,
    )


class TestTransitions:
    def test_new_submissions_start_as_new(self, client, admin_headers, submission_id):
        resp = client.get(f"/api/v1/submissions/{submission_id}", headers=admin_headers)
        assert resp.get_json()["submission"]["status"] == "new"

    @pytest.mark.parametrize("target", TARGETS)
    def test_comment_is_stored(self, client, admin_headers, submission_id, target):
        resp = set_status(client, admin_headers, submission_id, {"status": target, "comment": "Ser bra ut"})

        assert resp.status_code == 200
        body = resp.get_json()["submission"]
        assert body["status"] == target
        assert body["statusComment"] == "Ser bra ut"

    @pytest.mark.parametrize("target", TARGETS)
    def test_omitted_comment_keeps_previous(self, client, admin_headers, submission_id, target):
        set_status(client, admin_headers, submission_id, {"status": "reviewed", "comment": "Første"})

        resp = set_status(client, admin_headers, submission_id, {"status": target, "comment": None})

        body = resp.get_json()["submission"]
        assert body["status"] == target
        assert body["statusComment"] == "Første"

    def test_missing_comment_key_keeps_previous(self, client, admin_headers, submission_id):
        set_status(client, admin_headers, submission_id, {"status": "followup", "comment": "Ring kunden"})
        resp = set_status(client, admin_headers, submission_id, {"status": "inProgress"})
        assert resp.get_json()["submission"]["statusComment"] == "Ring kunden"

    def test_supplied_comment_overwrites(self, client, admin_headers, submission_id):
        set_status(client, admin_headers, submission_id, {"status": "reviewed", "comment": "Første"})
        resp = set_status(client, admin_headers, submission_id, {"status": "reviewed", "comment": ""})
        assert resp.get_json()["submission"]["statusComment"] == ""

    def test_any_state_reachable_from_any_state(self, client, admin_headers, submission_id):
        for target in ["completed", "reviewed", "inProgress", "followup", "completed"]:
            resp = set_status(client, admin_headers, submission_id, {"status": target})
            assert resp.status_code == 200
            assert resp.get_json()["submission"]["status"] == target

    def test_variant_wrapper_status_is_decoded(self, client, admin_headers, submission_id):
        resp = set_status(client, admin_headers, submission_id, {"status": {"inProgress": None}})
        assert resp.get_json()["submission"]["status"] == "inProgress"


class TestTransitionErrors:
    def test_unknown_submission(self, client, admin_headers):
        resp = set_status(client, admin_headers, 9999, {"status": "reviewed"})
        assert resp.status_code == 404
        assert resp.get_json()["error"]["code"] == "NOT_FOUND"

    def test_non_admin_is_forbidden(self, client, client_headers, submission_id):
        resp = set_status(client, client_headers, submission_id, {"status": "completed"})

        assert resp.status_code == 403
        assert db.session.get(ProjectSubmission, submission_id).status == "new"

    def test_anonymous_is_unauthorized(self, client, submission_id):
        resp = set_status(client, {}, submission_id, {"status": "completed"})
        assert resp.status_code == 401

    def test_new_is_rejected(self, client, admin_headers, submission_id):
        resp = set_status(client, admin_headers, submission_id, {"status": "new"})
        assert resp.status_code == 422

    def test_unknown_status_is_rejected(self, client, admin_headers, submission_id):
        resp = set_status(client, admin_headers, submission_id, {"status": "archived"})
        assert resp.status_code == 422
        assert "status" in resp.get_json()["error"]["details"]


class TestNotification:
    def test_email_goes_to_submission_address(self, client, admin_headers, submission_id):
        with patch("portal.services.email_service.send_email") as send:
            set_status(client, admin_headers, submission_id, {"status": "completed", "comment": "Ferdig"})

        send.assert_called_once()
        assert send.call_args.kwargs["to"] == "kari@fjord.no"
        assert "Fullført" in send.call_args.kwargs["subject"]
        assert "Ferdig" in send.call_args.kwargs["html"]

    def test_failed_email_does_not_fail_status_change(self, client, admin_headers, submission_id):
        with patch("portal.services.email_service.send_email", side_effect=OSError("smtp down")):
            resp = set_status(client, admin_headers, submission_id, {"status": "inProgress"})

        assert resp.status_code == 200
        assert db.session.get(ProjectSubmission, submission_id).status == "inProgress"
