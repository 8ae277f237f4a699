"""
PxPay Message Validator

Fail-fast validation of a rendered PxPay field set against its message
schema. Checks run in three passes and the first failure is raised:

1. Required fields, in schema order
2. Maximum lengths, for fields that are set
3. Message-specific checks (numeric amount, currency, transaction type)
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Mapping, Optional

from pxpay.core.exceptions import PxPayValidationError, ValidationReason
from pxpay.protocol.pxpay_codes import SUPPORTED_CURRENCIES, SUPPORTED_TRANSACTION_TYPES

if TYPE_CHECKING:
    from pxpay.protocol.pxpay_schema import MessageSchema

logger = logging.getLogger(__name__)


class PxPayValidator:
    """
    Validator for one PxPay message schema.

    Example:
        validator = PxPayValidator(GENERATE_REQUEST_SCHEMA)
        validator.validate({"AmountInput": "1.00", ...})
    """

    def __init__(self, schema: "MessageSchema"):
        self.schema = schema

    @property
    def name(self) -> str:
        return f"PxPayValidator[{self.schema.root_tag}]"

    def validate(self, values: Mapping[str, Optional[str]]) -> None:
        """
        Validate rendered field values keyed by wire name.

        Raises:
            PxPayValidationError: On the first rule the values break
        """
        for spec in self.schema.fields:
            if spec.required and not values.get(spec.wire_name):
                self._fail(spec.wire_name, ValidationReason.MISSING)

        for spec in self.schema.fields:
            value = values.get(spec.wire_name)
            if value is None or spec.max_length is None:
                continue
            if len(value) > spec.max_length:
                self._fail(spec.wire_name, ValidationReason.TOO_LONG, limit=spec.max_length)

        for wire_name, check in self.schema.checks:
            value = values.get(wire_name)
            reason = check(value)
            if reason is not None:
                self._fail(wire_name, reason, value=value)

    def _fail(
        self,
        field: str,
        reason: ValidationReason,
        limit: Optional[int] = None,
        value: Optional[str] = None,
    ) -> None:
        logger.debug(f"{self.name}: {field} rejected ({reason.value})")
        raise PxPayValidationError(field, reason, limit=limit, value=value)


# Field checks: return a reason when the value is unacceptable, None if fine
def is_numeric_amount(value: Optional[str]) -> Optional[ValidationReason]:
    """Amount must parse as a finite number."""
    try:
        amount = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        return ValidationReason.NOT_NUMERIC

    if not amount.is_finite():
        return ValidationReason.NOT_NUMERIC
    return None


def is_supported_currency(value: Optional[str]) -> Optional[ValidationReason]:
    if value not in SUPPORTED_CURRENCIES:
        return ValidationReason.UNSUPPORTED_CURRENCY
    return None


def is_supported_transaction_type(value: Optional[str]) -> Optional[ValidationReason]:
    if value not in SUPPORTED_TRANSACTION_TYPES:
        return ValidationReason.UNSUPPORTED_TRANSACTION_TYPE
    return None
