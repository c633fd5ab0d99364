"""Error taxonomy shared by the providers, the planner service and the API."""
from __future__ import annotations

from typing import Optional


class ErrorCode:
    BAD_USER_INPUT = "BAD_USER_INPUT"
    INVALID_COORDINATES = "INVALID_COORDINATES"
    TIMEOUT = "TIMEOUT"
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


class PlannerError(Exception):
    """Base error carrying a stable machine readable code."""

    code = ErrorCode.INTERNAL_SERVER_ERROR

    def __init__(self, message: str, *, service: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.service = service

    def with_service(self, service: str) -> "PlannerError":
        if self.service is None:
            self.service = service
        return self


# User errors ------------------------------------------------------------
class UserInputError(PlannerError):
    """Malformed input rejected before any network call."""

    code = ErrorCode.BAD_USER_INPUT


class InvalidQuery(UserInputError):
    code = ErrorCode.BAD_USER_INPUT


class InvalidCoordinates(UserInputError):
    code = ErrorCode.INVALID_COORDINATES


class InvalidCityIdFormat(InvalidCoordinates):
    """City id that is not ``lat,lon:name:country``."""


# Upstream errors --------------------------------------------------------
class ProviderError(PlannerError):
    """Failure of an outbound Open-Meteo call."""

    code = ErrorCode.UNKNOWN_ERROR

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        service: Optional[str] = None,
    ) -> None:
        super().__init__(message, service=service)
        self.status_code = status_code


class ProviderTimeout(ProviderError):
    code = ErrorCode.TIMEOUT


class QuotaExceeded(ProviderError):
    """Raised when a provider reports a quota/usage limit issue."""

    code = ErrorCode.RATE_LIMIT_EXCEEDED


# Internal errors --------------------------------------------------------
class InternalError(PlannerError):
    code = ErrorCode.INTERNAL_SERVER_ERROR


__all__ = [
    "ErrorCode",
    "PlannerError",
    "UserInputError",
    "InvalidQuery",
    "InvalidCoordinates",
    "InvalidCityIdFormat",
    "ProviderError",
    "ProviderTimeout",
    "QuotaExceeded",
    "InternalError",
]
