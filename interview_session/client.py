"""HTTP client for the practice session API."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Protocol

import httpx

from api.schemas import GradeReq, GradeResp, SessionReq, SessionResp
from config.settings import settings

logger = logging.getLogger(__name__)


class PracticeApiError(RuntimeError):  # Non-2xx answer from the practice API
    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class PracticeApi(Protocol):  # Operations the session driver needs from the server
    def create_session(self, request: SessionReq) -> SessionResp: ...

    def grade(self, request: GradeReq) -> GradeResp: ...


class HttpPracticeApi:  # httpx-backed PracticeApi
    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        client: Optional[httpx.Client] = None,
        timeout: float = 60.0,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.Client(base_url=base_url or settings.API_BASE_URL, timeout=timeout)

    def __enter__(self) -> "HttpPracticeApi":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def create_session(self, request: SessionReq) -> SessionResp:
        data = self._post("/api/session", request.model_dump(exclude_none=True))
        return SessionResp.model_validate(data)

    def grade(self, request: GradeReq) -> GradeResp:
        data = self._post("/api/grade", request.model_dump())
        return GradeResp.model_validate(data)

    def _post(self, path: str, payload: Dict[str, Any]) -> Any:
        response = self._client.post(path, json=payload)
        if response.status_code >= 400:
            raise PracticeApiError(response.status_code, _error_message(response))
        try:
            return response.json()
        except ValueError as exc:
            raise PracticeApiError(response.status_code, "response was not JSON") from exc


def _error_message(response: httpx.Response) -> str:  # Prefer the {"error": ...} body
    try:
        body = response.json()
    except ValueError:
        return response.text.strip() or "no body"
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return response.text.strip() or "no body"


__all__ = ["HttpPracticeApi", "PracticeApi", "PracticeApiError"]
