"""Translate core errors into HTTP errors."""

from __future__ import annotations

from fastapi import HTTPException, status

from ..models.results import CoreError, NotFoundError, TransitionError, ValidationError


def http_error(exc: CoreError) -> HTTPException:
    if isinstance(exc, NotFoundError):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, TransitionError):
        code = status.HTTP_409_CONFLICT
    elif isinstance(exc, ValidationError):
        code = status.HTTP_400_BAD_REQUEST
    else:
        code = status.HTTP_422_UNPROCESSABLE_ENTITY
    return HTTPException(status_code=code, detail=exc.to_dict())
