from __future__ import annotations

from typing import Any, Mapping
from urllib.parse import quote

import httpx
import structlog

from ..application.facade import RecordsApi
from ..config import settings
from ..domain.entities import Adaptation, Report, Student, StudentReport, User
from ..domain.errors import Forbidden, NotFound, RecordsError, TransportError, Unauthorized, ValidationFailed

logger = structlog.get_logger()

_STATUS_ERRORS: dict[int, type[RecordsError]] = {
    400: ValidationFailed,
    401: Unauthorized,
    403: Forbidden,
    404: NotFound,
    422: ValidationFailed,
}


def _error_message(body: Any) -> str | None:
    detail = body.get("detail") if isinstance(body, dict) else None
    if isinstance(detail, str):
        return detail
    # FastAPI request validation: a list of {"loc": [...], "msg": "..."}
    if isinstance(detail, list) and detail and isinstance(detail[0], dict):
        first = detail[0]
        field = ".".join(str(p) for p in first.get("loc", [])[1:]) or "body"
        return f"{field}: {first.get('msg', 'invalid value')}"
    return None


def handle_response(response: httpx.Response) -> dict:
    is_json = "application/json" in response.headers.get("content-type", "")

    if not response.is_success:
        if not is_json:
            raise TransportError(
                f"Server error: {response.status_code} {response.reason_phrase}. The response is not valid JSON."
            )
        message = _error_message(response.json()) or f"API error: {response.status_code}"
        raise _STATUS_ERRORS.get(response.status_code, TransportError)(message)

    if not is_json:
        raise TransportError("The API response is not in the expected JSON format.")
    return response.json()


def _segment(value: str) -> str:
    # the server decodes %2F before routing, so such ids cannot reach a record
    if "/" in str(value):
        raise ValidationFailed(f"Invalid id: {value!r}")
    return quote(str(value), safe="")


class HttpRecordsApi(RecordsApi):
    """Remote variant: the same calls as HTTP requests against the records API.

    The bearer token obtained by ``sign_in`` is kept on the instance only.
    """

    def __init__(self, base_url: str | None = None, client: httpx.Client | None = None):
        self.client = client or httpx.Client(base_url=base_url or settings.API_URL)
        self._token: str | None = None
        self._user: User | None = None

    def _request(self, method: str, path: str, payload: Mapping[str, Any] | None = None) -> dict:
        headers = {"Authorization": f"Bearer {self._token}"} if self._token else {}
        try:
            response = self.client.request(
                method, path, json=dict(payload) if payload is not None else None, headers=headers
            )
        except httpx.HTTPError as e:
            logger.warning("api_unreachable", method=method, path=path, error=str(e))
            raise TransportError(f"Could not reach the server: {e}") from e
        return handle_response(response)

    # --- session

    def sign_in(self, email: str, password: str) -> User:
        body = self._request("POST", "/login", {"email": email, "password": password})
        self._token = body["access_token"]
        try:
            self._user = User.from_document(self._request("GET", "/me")["user"])
        except RecordsError:
            self._token = None
            raise
        return self._user

    def sign_out(self) -> None:
        self._token = None
        self._user = None

    def current_user(self) -> User | None:
        return self._user

    # --- students

    def get_students(self) -> list[Student]:
        body = self._request("GET", "/students")
        return [Student.model_validate(s) for s in body["students"]]

    def create_student(self, data: Mapping[str, Any]) -> Student:
        return Student.model_validate(self._request("POST", "/students", data)["student"])

    def update_student(self, student_id: str, changes: Mapping[str, Any]) -> Student:
        body = self._request("PUT", f"/students/{_segment(student_id)}", changes)
        return Student.model_validate(body["student"])

    def delete_student(self, student_id: str) -> None:
        self._request("DELETE", f"/students/{_segment(student_id)}")

    # --- adaptations

    def get_adaptations(self, student_id: str) -> list[Adaptation]:
        body = self._request("GET", f"/adaptations/{_segment(student_id)}")
        return [Adaptation.model_validate(a) for a in body["adaptations"]]

    def create_adaptation(self, data: Mapping[str, Any]) -> Adaptation:
        return Adaptation.model_validate(self._request("POST", "/adaptations", data)["adaptation"])

    def update_adaptation(self, student_id: str, adaptation_id: str, changes: Mapping[str, Any]) -> Adaptation:
        path = f"/adaptations/{_segment(student_id)}/{_segment(adaptation_id)}"
        return Adaptation.model_validate(self._request("PUT", path, changes)["adaptation"])

    def delete_adaptation(self, student_id: str, adaptation_id: str) -> None:
        self._request("DELETE", f"/adaptations/{_segment(student_id)}/{_segment(adaptation_id)}")

    # --- reports

    def get_reports(self, student_id: str) -> list[Report]:
        body = self._request("GET", f"/reports/{_segment(student_id)}")
        return [Report.model_validate(r) for r in body["reports"]]

    def create_report(self, data: Mapping[str, Any]) -> Report:
        return Report.model_validate(self._request("POST", "/reports", data)["report"])

    def update_report(self, student_id: str, report_id: str, changes: Mapping[str, Any]) -> Report:
        path = f"/reports/{_segment(student_id)}/{_segment(report_id)}"
        return Report.model_validate(self._request("PUT", path, changes)["report"])

    def delete_report(self, student_id: str, report_id: str) -> None:
        self._request("DELETE", f"/reports/{_segment(student_id)}/{_segment(report_id)}")

    def get_student_report(self, student_id: str) -> StudentReport:
        return StudentReport.model_validate(self._request("GET", f"/student-report/{_segment(student_id)}"))
