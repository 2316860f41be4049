"""
Tests for the service layer decorators.
"""

import pytest

from cheat_risk.core.chess_api import NotFoundError
from cheat_risk.core.decorators import input_validation, service_error_handler
from cheat_risk.core.exceptions import (
    InputValidationError,
    ServiceException,
    UpstreamFailure,
)


class FakeService:
    def __init__(self, error=None):
        self.error = error

    @service_error_handler("FakeService")
    @input_validation(validate_non_empty=["username"])
    async def lookup(self, username: str, rated_only: bool = True) -> str:
        if self.error is not None:
            raise self.error
        return username.upper()


async def test_result_is_returned():
    assert await FakeService().lookup("hikaru") == "HIKARU"


@pytest.mark.parametrize("username", ["", "   ", None])
async def test_blank_argument_is_rejected(username):
    with pytest.raises(InputValidationError) as exc_info:
        await FakeService().lookup(username)

    assert exc_info.value.errors == ["username: empty"]
    assert exc_info.value.operation == "lookup"


@pytest.mark.parametrize(
    "error",
    [
        UpstreamFailure("down", username="hikaru", status_code=503),
        NotFoundError("Resource not found", status_code=404),
        InputValidationError("bad metrics", errors=["account_age must be >= 0"]),
        ServiceException("broken", service="Other", operation="run"),
    ],
)
async def test_known_errors_propagate_unchanged(error):
    with pytest.raises(type(error)) as exc_info:
        await FakeService(error).lookup("hikaru")

    assert exc_info.value is error


async def test_value_error_becomes_input_validation_error():
    """Test that a ValueError is reported as invalid input"""
    # Setup
    service = FakeService(ValueError("score out of range"))

    # Execute
    with pytest.raises(InputValidationError) as exc_info:
        await service.lookup("hikaru")

    # Verify
    error = exc_info.value
    assert error.errors == ["score out of range"]
    assert error.service == "FakeService"
    assert error.operation == "lookup"
    assert error.context["username"] == "hikaru"
    assert error.context["rated_only"] == "True"


async def test_unexpected_error_is_wrapped():
    original = RuntimeError("boom")

    with pytest.raises(ServiceException) as exc_info:
        await FakeService(original).lookup("hikaru")

    assert not isinstance(exc_info.value, InputValidationError)
    assert exc_info.value.original_error is original
    assert str(exc_info.value).startswith("[FakeService.lookup]")
