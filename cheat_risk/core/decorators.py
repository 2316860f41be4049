"""
Service layer decorators for common functionality.

This module provides decorators for error handling, logging, and input
validation in the service layer.
"""

import functools
import inspect
import structlog
from typing import Any, Awaitable, Callable, Dict, ParamSpec, TypeVar

from cheat_risk.core.exceptions import (
    InputValidationError,
    ServiceException,
    UpstreamFailure,
)
from cheat_risk.core.chess_api.errors import ChessAPIError

logger = structlog.get_logger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


def _call_context(
    func: Callable[..., Any], service_name: str, args: tuple, kwargs: dict
) -> Dict[str, Any]:
    bound_args = inspect.signature(func).bind(*args, **kwargs)
    bound_args.apply_defaults()

    context: Dict[str, Any] = {"service": service_name, "operation": func.__name__}
    for name, value in bound_args.arguments.items():
        if name == "self":
            continue
        # Limit values to avoid huge log entries
        context[name] = str(value)[:200] if value is not None else None
    return context


def service_error_handler(
    service_name: str,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """
    Decorator for handling async service method errors with structured logging.

    Upstream and validation errors propagate unchanged so callers can tell
    them apart. A ``ValueError`` becomes ``InputValidationError``; anything
    else unexpected is wrapped in ``ServiceException``.

    :param service_name: Name of the service (e.g., "RiskAnalysisService")
    :returns: Decorated function with error handling
    """

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        operation_name = func.__name__

        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            context = _call_context(func, service_name, args, kwargs)

            try:
                logger.debug("Service method called", **context)
                result = await func(*args, **kwargs)
                logger.debug("Service method completed successfully", **context)
                return result

            except (UpstreamFailure, ChessAPIError) as e:
                logger.warning(
                    "Upstream error in service operation - propagating to caller",
                    error_type=e.__class__.__name__,
                    error_message=str(e),
                    status_code=getattr(e, "status_code", None),
                    **context,
                )
                raise

            except InputValidationError as e:
                logger.warning(
                    "Invalid input in service operation",
                    error_message=str(e),
                    errors=e.errors,
                    **context,
                )
                raise

            except ServiceException as e:
                logger.error(
                    "Service operation failed",
                    error_type=e.__class__.__name__,
                    error_message=str(e),
                    error_context=e.context,
                    **context,
                )
                raise

            except ValueError as e:
                logger.error(
                    "Validation error in service operation",
                    error_message=str(e),
                    **context,
                )
                raise InputValidationError(
                    message=str(e),
                    errors=[str(e)],
                    service=service_name,
                    operation=operation_name,
                    context=context,
                ) from e

            except Exception as e:
                logger.error(
                    "Unexpected error in service operation",
                    error_type=e.__class__.__name__,
                    error_message=str(e),
                    **context,
                )
                raise ServiceException(
                    message=f"Unexpected error in {service_name}.{operation_name}: {e}",
                    service=service_name,
                    operation=operation_name,
                    context=context,
                    original_error=e,
                ) from e

        return wrapper

    return decorator


def input_validation(
    validate_non_empty: list[str],
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """
    Reject calls whose named string arguments are missing or blank.

    :param validate_non_empty: Parameter names that must not be empty

    :example:
        @input_validation(validate_non_empty=["username"])
    """

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        signature = inspect.signature(func)

        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            bound_args = signature.bind(*args, **kwargs)
            bound_args.apply_defaults()

            for param_name in validate_non_empty:
                value = bound_args.arguments.get(param_name)
                if value is None or (isinstance(value, str) and not value.strip()):
                    raise InputValidationError(
                        f"{param_name} cannot be empty or None",
                        errors=[f"{param_name}: empty"],
                        operation=func.__name__,
                    )

            return await func(*args, **kwargs)

        return wrapper

    return decorator
