"""Error Hierarchy — tests for codes, statuses and the response envelope."""

import pytest

from ethos_guild.core.errors import (
    AuthenticationRequiredError, BusinessRuleError, DatabaseError, ErrorCategory,
    GuildError, InputValidationError, PaymentGatewayError, PermissionDeniedError,
    ReceiptNotaryError, ResourceNotFoundError, SlugConflictError, SoldOutError,
    TicketAlreadyUsedError,
)


@pytest.mark.parametrize("error,status,category", [
    (InputValidationError("bad"), 400, ErrorCategory.VALIDATION),
    (AuthenticationRequiredError(), 401, ErrorCategory.AUTHENTICATION),
    (PermissionDeniedError(), 403, ErrorCategory.PERMISSION),
    (ResourceNotFoundError("Artifact", "x"), 404, ErrorCategory.RESOURCE_NOT_FOUND),
    (SlugConflictError("aurora"), 409, ErrorCategory.CONFLICT),
    (BusinessRuleError("no"), 400, ErrorCategory.BUSINESS_RULE),
    (PaymentGatewayError("timeout"), 502, ErrorCategory.EXTERNAL_API),
    (ReceiptNotaryError("down"), 502, ErrorCategory.EXTERNAL_API),
    (DatabaseError("boom", "commit"), 503, ErrorCategory.DATABASE),
])
def test_error_status_and_category(error, status, category):
    assert isinstance(error, GuildError)
    assert error.http_status == status
    assert error.category == category


def test_sold_out_and_used_are_business_rules_with_stable_codes():
    sold_out = SoldOutError("Event is sold out")
    used = TicketAlreadyUsedError()
    assert isinstance(sold_out, BusinessRuleError)
    assert sold_out.code == "SOLD_OUT"
    assert used.code == "TICKET_ALREADY_USED"
    assert used.message == "Ticket already used"


def test_not_found_response_envelope():
    body = ResourceNotFoundError("Order", "abc").to_response()
    error = body["error"]
    assert error["code"] == "RESOURCE_NOT_FOUND"
    assert error["message"] == "Order 'abc' not found"
    assert error["category"] == "resource_not_found"
    assert error["context"] == {"resource_type": "Order", "resource_id": "abc"}
    assert "timestamp" in error


def test_slug_conflict_message():
    assert SlugConflictError("aurora").message == "QR slug already in use"
