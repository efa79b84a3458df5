"""Translation of engine errors into HTTP errors."""

from __future__ import annotations

from fastapi import HTTPException

from predial.core.errors import ConfigurationError, InvalidArgumentError, NotFoundError


def to_http_exception(exc: Exception, configuration_status: int = 500) -> HTTPException:
    """Map an engine error to the HTTPException a route should raise.

    Rate-table misses become 404 with the engine's message, so screens can
    show it as-is ("No UIT published for year 2031").
    """
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, InvalidArgumentError):
        return HTTPException(status_code=400, detail=str(exc))
    if isinstance(exc, ConfigurationError):
        return HTTPException(status_code=configuration_status, detail=str(exc))
    raise exc
