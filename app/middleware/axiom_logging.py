"""Axiom API 로깅 미들웨어.

Axiom API logging middleware.
Sends one structured event per request to Axiom: method, path, query and
path params, masked request body, status code, duration and error detail.
Sensitive keys (password, token, secret, ...) are masked before sending.
When AXIOM_API_TOKEN or AXIOM_DATASET is unset the middleware is a pass-through.
"""

import json
import logging
import re
import time
from typing import Any

from axiom_py import Client as AxiomClient
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.config import settings

logger = logging.getLogger(__name__)

# 마스킹 대상 키 패턴 — Keys whose values are masked
_SENSITIVE_KEYS = re.compile(
    r"(password|passwd|secret|token|authorization|api_key|apikey|credential)",
    re.IGNORECASE,
)

# 로깅 제외 경로 — Paths never logged
_SKIP_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}

_MAX_DEPTH = 5
_MAX_LIST_ITEMS = 20
_MAX_ERROR_LEN = 500


def mask_sensitive(data: Any, depth: int = 0) -> Any:
    """민감 필드를 재귀적으로 마스킹합니다.

    Recursively replace values of sensitive keys with "***".
    Nested structures deeper than five levels collapse to "...", and
    lists are cut to their first twenty items.
    """
    if depth > _MAX_DEPTH:
        return "..."
    if isinstance(data, dict):
        return {
            key: "***" if _SENSITIVE_KEYS.search(str(key)) else mask_sensitive(value, depth + 1)
            for key, value in data.items()
        }
    if isinstance(data, list):
        return [mask_sensitive(item, depth + 1) for item in data[:_MAX_LIST_ITEMS]]
    return data


def extract_error_detail(body: bytes) -> str:
    """에러 응답 본문에서 사유를 추출합니다.

    Pull the "detail" field out of a JSON error body, falling back to the
    raw text. The result is capped at 500 characters.
    """
    try:
        payload = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return body.decode("utf-8", errors="replace")[:_MAX_ERROR_LEN]

    detail = payload.get("detail", payload) if isinstance(payload, dict) else payload
    text = detail if isinstance(detail, str) else json.dumps(detail, default=str)
    if len(text) > _MAX_ERROR_LEN:
        return text[:_MAX_ERROR_LEN] + "..."
    return text


class AxiomLoggingMiddleware(BaseHTTPMiddleware):
    """모든 API 요청/응답을 Axiom에 로깅하는 미들웨어.

    Middleware that logs API requests and responses to Axiom.
    """

    def __init__(self, app: Any, client: AxiomClient | None = None) -> None:
        super().__init__(app)
        self._dataset: str = settings.AXIOM_DATASET
        self._client: AxiomClient | None = client
        if self._client is None and settings.AXIOM_API_TOKEN and settings.AXIOM_DATASET:
            self._client = AxiomClient(token=settings.AXIOM_API_TOKEN)

    async def _read_body(self, request: Request) -> Any:
        if request.method not in ("POST", "PUT", "PATCH"):
            return None
        raw = await request.body()
        if not raw:
            return None
        try:
            return mask_sensitive(json.loads(raw))
        except (json.JSONDecodeError, UnicodeDecodeError):
            return "(non-json body)"

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if self._client is None or request.url.path in _SKIP_PATHS:
            return await call_next(request)

        started: float = time.perf_counter()
        event: dict[str, Any] = {
            "method": request.method,
            "path": request.url.path,
            "status_code": 500,
        }
        if request.query_params:
            event["query_params"] = mask_sensitive(dict(request.query_params))
        body = await self._read_body(request)
        if body is not None:
            event["request_body"] = body

        try:
            response = await call_next(request)
            event["status_code"] = response.status_code

            # 에러 응답은 본문을 읽어 사유를 기록한 뒤 다시 감싸서 반환
            # Error bodies are consumed for the log and re-wrapped
            if response.status_code >= 400:
                chunks: list[bytes] = []
                async for chunk in response.body_iterator:
                    chunks.append(chunk if isinstance(chunk, bytes) else chunk.encode("utf-8"))
                content = b"".join(chunks)
                event["error"] = extract_error_detail(content)
                response = Response(
                    content=content,
                    status_code=response.status_code,
                    headers=dict(response.headers),
                    media_type=response.media_type,
                )
        except Exception as exc:
            event["error"] = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            if request.path_params:
                event["path_params"] = dict(request.path_params)
            event["duration_ms"] = round((time.perf_counter() - started) * 1000, 2)
            try:
                self._client.ingest_events(self._dataset, [event])
            except Exception:
                # 로깅 실패가 요청 처리에 영향주지 않도록 — Never break a request on log failure
                logger.warning("Axiom ingest failed for %s %s", event["method"], event["path"], exc_info=True)

        return response
