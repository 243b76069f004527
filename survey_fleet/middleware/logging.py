import logging
import logging.handlers
import sys
import time
import uuid
from pathlib import Path
from typing import Callable, Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(log_level: str = "INFO", log_file: Optional[str] = None) -> None:
    """Configure root logging with a console handler and an optional rotating file."""
    level = getattr(logging, log_level.upper(), logging.INFO)
    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    handlers = [console_handler]

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            path, maxBytes=5*1024*1024, backupCount=3
        )
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    logging.basicConfig(level=level, handlers=handlers, force=True)

    # Suppress paho-mqtt debug logs unless DEBUG level
    if level != logging.DEBUG:
        logging.getLogger("paho.mqtt").setLevel(logging.WARNING)


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.time()

        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        request.state.request_id = request_id
        path = request.url.path
        method = request.method
        client_ip = request.client.host if request.client else None

        logger.info(
            "Request: %s %s from %s", method, path, client_ip,
            extra={"request_id": request_id, "method": method, "path": path, "client_ip": client_ip}
        )

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "Error processing %s %s: %s", method, path, e,
                exc_info=True,
                extra={"request_id": request_id, "method": method, "path": path}
            )
            raise

        process_time = time.time() - start_time
        logger.info(
            "Response: %s for %s %s took %.3fs", response.status_code, method, path, process_time,
            extra={"request_id": request_id, "status_code": response.status_code, "process_time": process_time}
        )

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = str(process_time)
        return response
