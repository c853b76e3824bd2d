from __future__ import annotations  # LLM request gateway module

import logging
from typing import Any, Callable, Dict, Optional, Protocol, Sequence, Tuple

import httpx

from config import LlmConfigError, LlmRoute


logger = logging.getLogger(__name__)  # Module logger setup


class HttpClient(Protocol):  # Minimal HTTP client protocol
    def post(self, url: str, *, json: Dict[str, Any], headers: Dict[str, str], timeout: float) -> "HttpResponse": ...


class HttpResponse(Protocol):  # Minimal HTTP response protocol
    @property
    def status_code(self) -> int: ...

    def json(self) -> Any: ...

    @property
    def text(self) -> str: ...


class LlmGatewayError(RuntimeError):  # Base gateway error
    pass


def complete(
    messages: Sequence[Dict[str, str]],
    *,
    cfg: LlmRoute,
    client: Optional[HttpClient] = None,
    options: Optional[Dict[str, Any]] = None,
) -> str:  # Send one chat completion request and return the raw reply text
    if not cfg.api_key:
        raise LlmConfigError(f"API key missing for route {cfg.name}")
    payload: Dict[str, Any] = {"model": cfg.model, "messages": _normalize_messages(messages)}
    if options:
        payload.update(options)
    headers = {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {cfg.api_key}",
    }
    headers.update(cfg.extra_headers)
    preview = _preview(payload["messages"])
    if len(preview) > 120:
        preview = preview[:117] + "..."
    logger.info("LLM request send route=%s model=%s preview=%s", cfg.name, cfg.model, preview)
    try:
        response, close_cb = _post(f"{cfg.base_url}{cfg.endpoint}", payload, headers, cfg.timeout_s, client)
    except httpx.HTTPError as exc:
        logger.error("LLM transport failure: %s", exc)
        raise LlmGatewayError("LLM transport failed") from exc
    try:
        if response.status_code >= 400:
            logger.error("LLM error status: %s", response.status_code)
            raise LlmGatewayError(f"LLM returned status {response.status_code}: {_body_excerpt(response)}")
        try:
            data = response.json()
        except ValueError as exc:
            logger.error("Invalid JSON payload from LLM: %s", exc)
            raise LlmGatewayError("LLM payload was not JSON") from exc
        content = _extract_content(data)
    finally:
        _close_safely(close_cb)
    logger.info("LLM request done route=%s model=%s chars=%d", cfg.name, cfg.model, len(content))
    return content


def _post(url: str, payload: Dict[str, Any], headers: Dict[str, str], timeout: float, client: Optional[HttpClient]) -> Tuple[HttpResponse, Optional[Callable[[], None]]]:  # Dispatch HTTP request
    if client is not None:
        return client.post(url, json=payload, headers=headers, timeout=timeout), None
    http_client = httpx.Client(timeout=timeout)
    try:
        response = http_client.post(url, json=payload, headers=headers)
    except httpx.HTTPError:
        http_client.close()
        raise
    return response, http_client.close


def _close_safely(close_cb: Optional[Callable[[], None]]) -> None:  # Close HTTP client callback when provided
    if close_cb is not None:
        close_cb()


def _normalize_messages(messages: Sequence[Dict[str, str]]) -> list[Dict[str, str]]:  # Ensure message payload shape
    normalized: list[Dict[str, str]] = []
    for item in messages:
        if not isinstance(item, dict):
            raise TypeError("Each chat message must be a dict with role/content")
        role = str(item.get("role", "")).strip()
        content = str(item.get("content", ""))
        if not role:
            raise ValueError("Chat message missing role")
        normalized.append({"role": role, "content": content})
    return normalized


def _preview(messages: Sequence[Dict[str, str]]) -> str:  # Build preview string for logging
    for message in messages:
        if message.get("role") == "system":
            continue
        text = message.get("content", "").strip()
        if text:
            return text.splitlines()[0]
    return ""


def _body_excerpt(response: HttpResponse) -> str:  # Short error body for diagnostics
    text = (response.text or "").strip()
    if len(text) > 200:
        text = text[:197] + "..."
    return text


def _extract_content(data: Any) -> str:  # Extract message content from LLM response
    if isinstance(data, dict):
        choices = data.get("choices")
        if isinstance(choices, list) and choices:
            message = choices[0].get("message") if isinstance(choices[0], dict) else None
            content = message.get("content") if isinstance(message, dict) else None
            if isinstance(content, str):
                return content
        if isinstance(data.get("content"), str):
            return data["content"]
    raise LlmGatewayError("LLM response missing content")
