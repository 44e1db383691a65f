"""
Error taxonomy for the EnviroSense backend.
Every error carries the HTTP status the boundary layer answers with.
"""

from typing import Any, Dict, Optional


class EnviroSenseError(Exception):
    status_code = 500

    def __init__(self, message: str, payload: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.payload = payload or {}

    def to_dict(self) -> Dict[str, Any]:
        body = {"error": self.message}
        body.update(self.payload)
        return body


class ValidationError(EnviroSenseError):
    """Missing parameter, missing area selection or malformed coordinates."""
    status_code = 400


class OutOfBoundsError(ValidationError):
    """Location outside Pakistan. Carries the bounding box so callers can self-correct."""

    def __init__(self, message: str, bounds: Dict[str, float]):
        super().__init__(message, {"bounds": bounds})
        self.bounds = bounds


class UnsupportedExportError(ValidationError):
    status_code = 501


class UpstreamError(EnviroSenseError):
    """A backing store call failed or answered with an error payload."""
    status_code = 502


class InternalError(EnviroSenseError):
    status_code = 500


class NotFoundError(ValidationError):
    status_code = 404
