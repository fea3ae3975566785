"""Tests for attaching delivery links to finished projects."""

from unittest.mock import patch

from portal.extensions import db
from portal.models.submission import ProjectSubmission


def complete(client, headers, submission_id):
    resp = client.patch(
        f"/api/v1/admin/submissions/{submission_id}/status",
        json={"status": "completed"},
        headers=headers,
    )
    assert resp.status_code == 200


def add_link(client, headers, submission_id, link, description):
    return client.post(
        f"/api/v1/admin/submissions/{submission_id}/delivery",
        json={"link": link, "description": description},
        headers=headers,
    )


class TestDeliveryLink:
    def test_second_call_overwrites(self, client, admin_headers, submission_id):
        complete(client, admin_headers, submission_id)

        add_link(client, admin_headers, submission_id, "https://files.example/v1", "Første versjon")
        resp = add_link(client, admin_headers, submission_id, "https://files.example/v2", "Endelig versjon")

        body = resp.get_json()["submission"]
        assert body["deliveryLink"] == "https://files.example/v2"
        assert body["deliveryDescription"] == "Endelig versjon"

        stored = db.session.get(ProjectSubmission, submission_id)
        assert (stored.delivery_link, stored.delivery_description) == (
            "https://files.example/v2",
            "Endelig versjon",
        )

    def test_does_not_change_status(self, client, admin_headers, submission_id):
        complete(client, admin_headers, submission_id)
        resp = add_link(client, admin_headers, submission_id, "https://files.example/v1", "Levering")
        assert resp.get_json()["submission"]["status"] == "completed"

    def test_client_is_notified(self, client, admin_headers, submission_id):
        complete(client, admin_headers, submission_id)
        with patch("portal.services.email_service.send_email") as send:
            add_link(client, admin_headers, submission_id, "https://files.example/v1", "Levering")

        send.assert_called_once()
        assert "https://files.example/v1" in send.call_args.kwargs["html"]


class TestDeliveryPreconditions:
    def test_rejected_before_completion(self, client, admin_headers, submission_id):
        resp = add_link(client, admin_headers, submission_id, "https://files.example/v1", "For tidlig")

        assert resp.status_code == 409
        assert resp.get_json()["error"]["code"] == "INVALID_STATE"
        assert db.session.get(ProjectSubmission, submission_id).delivery_link is None

    def test_rejected_after_leaving_completed(self, client, admin_headers, submission_id):
        complete(client, admin_headers, submission_id)
        client.patch(
            f"/api/v1/admin/submissions/{submission_id}/status",
            json={"status": "followup"},
            headers=admin_headers,
        )

        resp = add_link(client, admin_headers, submission_id, "https://files.example/v1", "Levering")
        assert resp.status_code == 409

    def test_blank_fields(self, client, admin_headers, submission_id):
        complete(client, admin_headers, submission_id)
        resp = add_link(client, admin_headers, submission_id, "  ", "Levering")
        assert resp.status_code == 422

    def test_non_admin(self, client, admin_headers, client_headers, submission_id):
        complete(client, admin_headers, submission_id)
        resp = add_link(client, client_headers, submission_id, "https://files.example/v1", "Levering")
        assert resp.status_code == 403

    def test_unknown_submission(self, client, admin_headers):
        resp = add_link(client, admin_headers, 424242, "https://files.example/v1", "Levering")
        assert resp.status_code == 404
