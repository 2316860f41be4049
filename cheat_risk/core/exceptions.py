"""
Service layer custom exceptions.

This module defines the error taxonomy shared by the scoring engine, the
player data gateway and the HTTP layer.
"""

from typing import Any, Dict, List, Optional


class ServiceException(Exception):
    """Base exception for all service layer errors."""

    def __init__(
        self,
        message: str,
        service: Optional[str] = None,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.service = service
        self.operation = operation
        self.context = context or {}
        self.original_error = original_error

    def __str__(self) -> str:
        if self.service and self.operation:
            return f"[{self.service}.{self.operation}] {self.message}"
        return self.message


class InputValidationError(ServiceException):
    """Raised for malformed or missing metrics; input is never coerced."""

    def __init__(
        self,
        message: str,
        errors: Optional[List[str]] = None,
        service: Optional[str] = None,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            service=service,
            operation=operation,
            context=context,
        )
        self.errors: List[str] = list(errors or [])


class UpstreamFailure(ServiceException):
    """
    Failure of the player data gateway.

    Carries a stable ``tag`` so callers can tell "data could not be fetched"
    apart from a legitimate zero score.
    """

    tag = "upstream_failure"

    def __init__(
        self,
        message: str,
        username: Optional[str] = None,
        status_code: Optional[int] = None,
        operation: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(
            message=message,
            service="PlayerDataGateway",
            operation=operation,
            context={"username": username, "status_code": status_code},
            original_error=original_error,
        )
        self.username = username
        self.status_code = status_code


class PlayerNotFoundError(UpstreamFailure):
    """The upstream API has no such player."""

    tag = "player_not_found"

