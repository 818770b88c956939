import logging
import time
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from smartclinic.core.logger import logger

class LogMiddleware(BaseHTTPMiddleware):
    """Access log: one line per request, WARNING for 4xx and ERROR for 5xx."""

    async def dispatch(self, request: Request, call_next):
        start_time = time.perf_counter()
        client = request.client.host if request.client else "-"

        try:
            response = await call_next(request)
        except Exception:
            logger.exception(f"Unhandled error | {request.method} {request.url.path} | Client: {client}")
            raise

        process_time = time.perf_counter() - start_time

        if response.status_code >= 500:
            level = logging.ERROR
        elif response.status_code >= 400:
            level = logging.WARNING
        else:
            level = logging.INFO

        logger.log(
            level,
            f"{request.method} {request.url.path} | "
            f"Status: {response.status_code} | "
            f"Client: {client} | "
            f"Duration: {process_time:.4f}s"
        )

        return response
