"""Exception handlers mapping role manager errors to JSON responses."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..core.exceptions import RoleManagerError, get_http_status_code, create_error_response


logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """Register the RoleManagerError handler on ``app``."""

    @app.exception_handler(RoleManagerError)
    async def role_manager_error_handler(request: Request, exc: RoleManagerError):
        status_code = get_http_status_code(exc)
        if status_code >= 500:
            logger.error(f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}")
        else:
            logger.info(f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}")
        return JSONResponse(status_code=status_code, content=create_error_response(exc))
