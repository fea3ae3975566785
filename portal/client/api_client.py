"""HTTP client for the portal API.

Every response passes through one decode step here, so callers only ever
see ProjectStatus / BudgetRange members and never raw wire values.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests

from portal.models.enums import BudgetRange, ProjectStatus, UserRole

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 15


class PortalAPIError(Exception):
    """A remote call failed, either on the network or with an error envelope."""

    def __init__(self, message: str, status_code: Optional[int] = None, code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.details = details or {}


def decode_submission(raw: Dict[str, Any]) -> Dict[str, Any]:
    submission = dict(raw)
    submission["status"] = ProjectStatus.decode(raw["status"])
    submission["budget"] = BudgetRange(raw["budget"])
    submission["messages"] = [dict(m) for m in raw.get("messages", [])]
    return submission


def decode_grouped_messages(raw: List[Dict[str, Any]]) -> List[Tuple[int, List[Dict[str, Any]]]]:
    return [(int(group["projectId"]), list(group["messages"])) for group in raw]


class PortalClient:
    """Thin wrapper over the portal's REST endpoints."""

    def __init__(self, base_url: str, token: Optional[str] = None,
                 session: Optional[requests.Session] = None, timeout: float = DEFAULT_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

    def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        url = f"{self.base_url}/api/v1{path}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.error(f"{method} {path} failed: {e}")
            raise PortalAPIError(str(e)) from e

        try:
            body = response.json()
        except ValueError:
            body = {}

        if not response.ok:
            error = body.get("error", {}) if isinstance(body, dict) else {}
            message = error.get("message") or f"HTTP {response.status_code}"
            logger.error(f"{method} {path} returned {response.status_code}: {message}")
            raise PortalAPIError(
                message,
                status_code=response.status_code,
                code=error.get("code"),
                details=error.get("details"),
            )
        return body

    # -- profiles and roles -------------------------------------------------

    def get_caller_user_profile(self) -> Optional[Dict[str, str]]:
        return self._request("GET", "/profile").get("profile")

    def create_user_profile(self, profile: Dict[str, str]) -> Dict[str, str]:
        return self._request("POST", "/profile", json=profile)["profile"]

    def update_user_profile(self, profile: Dict[str, str]) -> Dict[str, str]:
        return self._request("PUT", "/profile", json=profile)["profile"]

    def save_caller_user_profile(self, profile: Dict[str, str]) -> Dict[str, str]:
        return self._request("PATCH", "/profile", json=profile)["profile"]

    def get_user_profile(self, principal: str) -> Optional[Dict[str, str]]:
        return self._request("GET", f"/profile/{principal}").get("profile")

    def get_caller_user_role(self) -> UserRole:
        return UserRole(self._request("GET", "/roles/me")["role"])

    def is_caller_admin(self) -> bool:
        return bool(self._request("GET", "/roles/me/is-admin")["isAdmin"])

    def assign_user_role(self, principal: str, role: UserRole) -> None:
        self._request("POST", "/admin/roles", json={"principal": principal, "role": UserRole(role).value})

    # -- submissions --------------------------------------------------------

    def submit_project(self, form: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/submissions/public", json=_form_payload(form))

    def submit_authenticated_project(self, form: Dict[str, Any], files: List[str]) -> Dict[str, Any]:
        payload = _form_payload(form)
        payload["files"] = list(files)
        return self._request("POST", "/submissions", json=payload)

    def get_all_submissions(self, client_name: Optional[str] = None,
                            status: Optional[ProjectStatus] = None) -> List[Dict[str, Any]]:
        params = {}
        if client_name:
            params["client"] = client_name
        if status is not None:
            params["status"] = ProjectStatus.decode(status).value
        body = self._request("GET", "/admin/submissions", params=params)
        return [decode_submission(s) for s in body["submissions"]]

    def get_submissions_by_client(self, client_name: str) -> List[Dict[str, Any]]:
        return self.get_all_submissions(client_name=client_name)

    def get_submissions_by_status(self, status: ProjectStatus) -> List[Dict[str, Any]]:
        return self.get_all_submissions(status=status)

    def get_user_projects(self) -> List[Dict[str, Any]]:
        return [decode_submission(s) for s in self._request("GET", "/submissions/mine")["submissions"]]

    def get_submission(self, project_id: int) -> Dict[str, Any]:
        return decode_submission(self._request("GET", f"/submissions/{project_id}")["submission"])

    def get_project_files(self, project_id: int) -> List[str]:
        return self._request("GET", f"/submissions/{project_id}/files")["files"]

    # -- mutations ----------------------------------------------------------

    def set_status(self, project_id: int, status: ProjectStatus, comment: Optional[str] = None) -> Dict[str, Any]:
        body = self._request(
            "PATCH",
            f"/admin/submissions/{project_id}/status",
            json={"status": ProjectStatus.decode(status).value, "comment": comment},
        )
        return decode_submission(body["submission"])

    def add_delivery_link(self, project_id: int, link: str, description: str) -> Dict[str, Any]:
        body = self._request(
            "POST",
            f"/admin/submissions/{project_id}/delivery",
            json={"link": link, "description": description},
        )
        return decode_submission(body["submission"])

    def send_message(self, project_id: int, sender: str, text: str) -> Dict[str, Any]:
        body = self._request(
            "POST",
            f"/submissions/{project_id}/messages",
            json={"sender": sender, "text": text},
        )
        return body["message"]

    # -- messages -----------------------------------------------------------

    def get_project_messages(self, project_id: int) -> List[Dict[str, Any]]:
        return self._request("GET", f"/submissions/{project_id}/messages")["messages"]

    def get_all_messages(self) -> List[Tuple[int, List[Dict[str, Any]]]]:
        return decode_grouped_messages(self._request("GET", "/admin/messages")["messages"])

    def get_all_user_messages(self) -> List[Tuple[int, List[Dict[str, Any]]]]:
        return decode_grouped_messages(self._request("GET", "/messages/mine")["messages"])


def _form_payload(form: Dict[str, Any]) -> Dict[str, Any]:
    budget = form.get("budget")
    return {
        "clientName": form.get("clientName", ""),
        "companyName": form.get("companyName", ""),
        "email": form.get("email", ""),
        "projectDescription": form.get("projectDescription", ""),
        "timeline": form.get("timeline", ""),
        "budget": BudgetRange(budget).value if budget else None,
    }
