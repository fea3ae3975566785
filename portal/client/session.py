"""Portal-side orchestration: validation, mutations and read-model refresh.

User-facing notices are in Norwegian, matching the rest of the portal.
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from portal.client.api_client import PortalAPIError, PortalClient
from portal.client.query_cache import PROJECT_QUERY_KEYS, QueryCache
from portal.models.enums import ProjectStatus, TRANSITION_TARGETS
from portal.utils.ordering import merge_feed, sort_thread

logger = logging.getLogger(__name__)

ADMIN_CHECK_RETRIES = 3
ADMIN_CHECK_MAX_DELAY_MS = 5000

MSG_REQUIRED_FIELDS = "Vennligst fyll ut alle obligatoriske felt"
MSG_SELECT_BUDGET = "Vennligst velg et budsjettområde"
MSG_SELECT_PROJECT = "Vennligst velg et prosjekt"
MSG_WRITE_MESSAGE = "Vennligst skriv en melding"
MSG_DELIVERY_FIELDS = "Vennligst fyll ut både lenke og beskrivelse"
MSG_DELIVERY_NOT_COMPLETED = "Leveringslenke kan kun legges til fullførte prosjekter"
MSG_SUBMIT_FAILED = "Kunne ikke sende inn prosjekt. Vennligst prøv igjen."
MSG_STATUS_FAILED = "Kunne ikke oppdatere innsending"
MSG_MESSAGE_FAILED = "Kunne ikke sende melding"
MSG_DELIVERY_FAILED = "Kunne ikke legge til leveringslenke"
MSG_PROFILE_FAILED = "Kunne ikke oppdatere profil"
MSG_PROFILE_MISSING = "Profil finnes ikke. Vennligst logg inn på nytt."
MSG_INVALID_STATUS = "Ugyldig status"
MSG_LOAD_FAILED = "Kunne ikke laste data. Vennligst prøv igjen."


def retry_delay_ms(attempt_index: int) -> int:
    return min(1000 * 2 ** attempt_index, ADMIN_CHECK_MAX_DELAY_MS)


@dataclass
class MutationResult:
    status: str  # "success" or "error"
    data: Any = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == "success"


def _blank(value: Optional[str]) -> bool:
    return not value or not str(value).strip()


class PortalSession:
    """One signed-in (or anonymous) user's view of the portal."""

    def __init__(self, client: PortalClient, cache: Optional[QueryCache] = None,
                 notify: Optional[Callable[[str, str], None]] = None,
                 sleep: Callable[[float], None] = time.sleep):
        self.client = client
        self.cache = cache or QueryCache()
        self.notify = notify or self._log_notice
        self.sleep = sleep

        self.cache.register("submissions", client.get_all_submissions)
        self.cache.register("userProjects", client.get_user_projects)
        self.cache.register("allMessages", client.get_all_messages)
        self.cache.register("allUserMessages", client.get_all_user_messages)
        self.cache.register("currentUserProfile", client.get_caller_user_profile)

    @staticmethod
    def _log_notice(level: str, message: str) -> None:
        logger.info(f"[{level}] {message}")

    def _fail(self, message: str) -> MutationResult:
        self.notify("error", message)
        return MutationResult(status="error", error=message)

    def _ok(self, message: Optional[str], data: Any = None) -> MutationResult:
        if message:
            self.notify("success", message)
        return MutationResult(status="success", data=data)

    # -- reads --------------------------------------------------------------

    def _read(self, key: str, default: Any) -> Any:
        """Cached read. A failed fetch is reported and yields `default`; the key
        stays stale so the next read tries again."""
        try:
            return self.cache.get(key)
        except PortalAPIError as e:
            logger.error(f"Loading '{key}' failed: {e}")
            self.notify("error", MSG_LOAD_FAILED)
            return default

    def submissions(self) -> List[Dict[str, Any]]:
        return self._read("submissions", [])

    def user_projects(self) -> List[Dict[str, Any]]:
        return self._read("userProjects", [])

    def submissions_by_status(self) -> Dict[ProjectStatus, List[Dict[str, Any]]]:
        grouped = {status: [] for status in ProjectStatus}
        for submission in self.submissions():
            grouped[submission["status"]].append(submission)
        return grouped

    def thread(self, submission: Dict[str, Any]) -> List[Dict[str, Any]]:
        return sort_thread(submission.get("messages", []))

    def admin_feed(self, project_id: Optional[int] = None) -> List[Dict[str, Any]]:
        grouped = self._read("allMessages", [])
        if project_id is not None:
            grouped = [(pid, msgs) for pid, msgs in grouped if pid == project_id]
        return merge_feed(grouped)

    def user_feed(self) -> List[Dict[str, Any]]:
        return merge_feed(self._read("allUserMessages", []))

    def current_profile(self) -> Optional[Dict[str, str]]:
        return self._read("currentUserProfile", None)

    def is_admin(self) -> bool:
        """Admin check, retried with capped exponential backoff. False if every attempt fails."""
        last_error = None
        for attempt in range(ADMIN_CHECK_RETRIES + 1):
            try:
                return self.client.is_caller_admin()
            except PortalAPIError as e:
                last_error = e
                if attempt < ADMIN_CHECK_RETRIES:
                    delay = retry_delay_ms(attempt)
                    logger.warning(
                        f"Admin check failed (attempt {attempt + 1}/{ADMIN_CHECK_RETRIES + 1}), "
                        f"retrying in {delay} ms: {e}"
                    )
                    self.sleep(delay / 1000)
        logger.error(f"Error checking admin status: {last_error}")
        return False

    # -- mutations ----------------------------------------------------------

    def _validate_form(self, form: Dict[str, Any]) -> Optional[str]:
        if any(_blank(form.get(f)) for f in ("clientName", "email", "projectDescription")):
            return MSG_REQUIRED_FIELDS
        if not form.get("budget"):
            return MSG_SELECT_BUDGET
        return None

    def submit_project(self, form: Dict[str, Any]) -> MutationResult:
        problem = self._validate_form(form)
        if problem:
            return self._fail(problem)
        try:
            result = self.client.submit_project(form)
        except PortalAPIError as e:
            logger.error(f"Project submission failed: {e}")
            return self._fail(MSG_SUBMIT_FAILED)
        return self._ok("Prosjekt sendt inn!", result)

    def submit_authenticated_project(self, form: Dict[str, Any], files: Optional[List[str]] = None) -> MutationResult:
        problem = self._validate_form(form)
        if problem:
            return self._fail(problem)
        try:
            result = self.client.submit_authenticated_project(form, files or [])
        except PortalAPIError as e:
            logger.error(f"Authenticated project submission failed: {e}")
            return self._fail(MSG_SUBMIT_FAILED)
        self.cache.refresh(("userProjects",))
        return self._ok("Prosjekt sendt inn!", result)

    def change_status(self, project_id: int, status: Any, comment: Optional[str] = None) -> MutationResult:
        """Single entry point for every admin status transition."""
        try:
            target = ProjectStatus.decode(status)
        except ValueError as e:
            logger.warning(f"Rejected status change of project {project_id}: {e}")
            return self._fail(MSG_INVALID_STATUS)
        if target not in TRANSITION_TARGETS:
            logger.warning(f"Rejected status change of project {project_id} to '{target.value}'")
            return self._fail(MSG_INVALID_STATUS)

        # an empty comment box means no comment, not a cleared one
        comment = comment.strip() if comment and comment.strip() else None
        try:
            updated = self.client.set_status(project_id, target, comment)
        except PortalAPIError as e:
            logger.error(f"Status change of project {project_id} to {target.value} failed: {e}")
            return self._fail(MSG_STATUS_FAILED)

        self.cache.refresh(PROJECT_QUERY_KEYS)
        return self._ok(f"Status oppdatert til {target.label.lower()}", updated)

    def send_message(self, project_id: Optional[int], sender: str, text: str) -> MutationResult:
        if project_id is None:
            return self._fail(MSG_SELECT_PROJECT)
        if _blank(text):
            return self._fail(MSG_WRITE_MESSAGE)
        try:
            message = self.client.send_message(project_id, sender, text.strip())
        except PortalAPIError as e:
            logger.error(f"Sending message on project {project_id} failed: {e}")
            return self._fail(MSG_MESSAGE_FAILED)

        self.cache.refresh(PROJECT_QUERY_KEYS)
        return self._ok("Melding sendt!", message)

    def add_delivery_link(self, project_id: int, link: str, description: str,
                          current_status: Optional[Any] = None) -> MutationResult:
        if _blank(link) or _blank(description):
            return self._fail(MSG_DELIVERY_FIELDS)
        if current_status is not None:
            try:
                known = ProjectStatus.decode(current_status)
            except ValueError:
                return self._fail(MSG_INVALID_STATUS)
            if known is not ProjectStatus.COMPLETED:
                return self._fail(MSG_DELIVERY_NOT_COMPLETED)
        try:
            updated = self.client.add_delivery_link(project_id, link.strip(), description.strip())
        except PortalAPIError as e:
            logger.error(f"Adding delivery link to project {project_id} failed: {e}")
            if e.code == "INVALID_STATE":
                return self._fail(MSG_DELIVERY_NOT_COMPLETED)
            return self._fail(MSG_DELIVERY_FAILED)

        self.cache.refresh(PROJECT_QUERY_KEYS)
        return self._ok("Leveringslenke lagt til!", updated)

    def _write_profile(self, call: Callable[[Dict[str, str]], Dict[str, str]],
                       profile: Dict[str, str], success: str) -> MutationResult:
        if _blank(profile.get("name")) or _blank(profile.get("email")):
            return self._fail(MSG_REQUIRED_FIELDS)
        try:
            saved = call(profile)
        except PortalAPIError as e:
            logger.error(f"Profile write failed: {e}")
            if e.status_code == 404:
                return self._fail(MSG_PROFILE_MISSING)
            return self._fail(MSG_PROFILE_FAILED)

        self.cache.set("currentUserProfile", saved)
        return self._ok(success, saved)

    def create_profile(self, profile: Dict[str, str]) -> MutationResult:
        return self._write_profile(self.client.create_user_profile, profile, "Profil opprettet!")

    def update_profile(self, profile: Dict[str, str]) -> MutationResult:
        return self._write_profile(self.client.update_user_profile, profile, "Profil oppdatert!")

    def save_profile(self, profile: Dict[str, str]) -> MutationResult:
        return self._write_profile(self.client.save_caller_user_profile, profile, "Profil lagret!")
