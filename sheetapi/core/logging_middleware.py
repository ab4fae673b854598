import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from sheetapi.core.exceptions import AuthenticationError
from sheetapi.core.security import decode_access_token

logger = logging.getLogger("sheetapi")


def request_user(request: Request) -> str:
    """Bearer 토큰의 user_id (DB 조회 없음). 토큰이 없으면 '-', 검증 실패면 'invalid'"""
    scheme, _, token = request.headers.get("authorization", "").partition(" ")
    if scheme.lower() != "bearer" or not token:
        return "-"
    try:
        return str(decode_access_token(token).user_id)
    except AuthenticationError:
        return "invalid"


class LoggingMiddleware(BaseHTTPMiddleware):
    """요청/응답 한 줄 로그 - 누가 어떤 포인트 연산을 호출했는지 추적용"""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start = time.perf_counter()
        target = f"{request.method} {request.url.path}"
        client = request.client.host if request.client else "-"
        user = request_user(request)

        logger.info(f"[Request] {target} user={user} from {client}")
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(f"[Unhandled Error] {target} user={user} from {client}")
            raise

        duration_ms = (time.perf_counter() - start) * 1000
        response.headers["X-Process-Time-Ms"] = f"{duration_ms:.1f}"

        line = f"[Response] {target} user={user} -> {response.status_code} in {duration_ms:.1f}ms"
        if response.status_code >= 500:
            logger.error(line)
        elif response.status_code >= 400:
            logger.warning(line)
        else:
            logger.info(line)
        return response
