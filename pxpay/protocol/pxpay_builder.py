"""
PxPay Message Builder

Turns typed request objects into the flat XML documents posted to the
gateway. Each message is a single root element whose children are the
non-empty fields in schema order.
"""

import logging
import xml.etree.ElementTree as ET
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Any, Dict, Optional

from pxpay.protocol.pxpay_message import ResultRequest, TransactionRequest
from pxpay.protocol.pxpay_schema import (
    GENERATE_REQUEST_SCHEMA,
    PROCESS_RESPONSE_SCHEMA,
    MessageSchema,
)
from pxpay.protocol.pxpay_validator import PxPayValidator

logger = logging.getLogger(__name__)

_CENTS = Decimal("0.01")


def format_amount(amount: Any) -> Optional[str]:
    """
    Format an amount as fixed point with exactly two decimals.

    Values that are not numbers are returned as text unchanged so the
    validator can report them.
    """
    if amount is None or amount == "":
        return None
    if isinstance(amount, bool):
        return str(amount)
    try:
        value = Decimal(str(amount).strip())
    except InvalidOperation:
        return str(amount)
    if not value.is_finite():
        return str(amount)
    try:
        value = value.quantize(_CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        # More digits than the context precision; far past the length limit anyway
        pass
    return format(value, "f")


def render_value(value: Any) -> Optional[str]:
    """Render a field value as wire text. None means the field is omitted."""
    if value is None:
        return None
    if isinstance(value, bool):
        return "1" if value else None
    if isinstance(value, Enum):
        value = getattr(value, "code", value.value)
    text = str(value)
    return text or None


class PxPayBuilder:
    """
    Builder for PxPay request documents.

    Example usage:
        builder = PxPayBuilder()
        xml = builder.build_generate_request(
            TransactionRequest(
                amount=Decimal("12.5"),
                currency=Currency.NZD,
                transaction_type=TransactionType.PURCHASE,
                url_success="https://shop.example/ok",
                url_fail="https://shop.example/fail",
            ),
            user_id="ShopUser",
            key=key,
        )
    """

    def __init__(self):
        self._generate_validator = PxPayValidator(GENERATE_REQUEST_SCHEMA)
        self._process_validator = PxPayValidator(PROCESS_RESPONSE_SCHEMA)

    def build_generate_request(self, request: TransactionRequest, user_id: str, key: str) -> str:
        """
        Validate and serialize a GenerateRequest.

        Raises:
            PxPayValidationError: If any field breaks the schema rules
        """
        values = self.render_fields(
            GENERATE_REQUEST_SCHEMA,
            {
                "user_id": user_id,
                "key": key,
                "amount": format_amount(request.amount),
                "billing_id": request.billing_id,
                "currency": request.currency,
                "email_address": request.email_address,
                "enable_add_bill_card": request.enable_add_bill_card,
                "merchant_reference": request.merchant_reference,
                "dps_billing_id": request.dps_billing_id,
                "txn_data1": request.txn_data1,
                "txn_data2": request.txn_data2,
                "txn_data3": request.txn_data3,
                "transaction_type": request.transaction_type,
                "txn_id": request.txn_id,
                "url_fail": request.url_fail,
                "url_success": request.url_success,
                "opt": request.opt,
            },
        )
        self._generate_validator.validate(values)
        return self.to_xml(GENERATE_REQUEST_SCHEMA, values)

    def build_process_response(self, request: ResultRequest, user_id: str, key: str) -> str:
        """
        Validate and serialize a ProcessResponse for a result token.

        Raises:
            PxPayValidationError: If credentials or the token are missing or too long
        """
        values = self.render_fields(
            PROCESS_RESPONSE_SCHEMA,
            {"user_id": user_id, "key": key, "response": request.response},
        )
        self._process_validator.validate(values)
        return self.to_xml(PROCESS_RESPONSE_SCHEMA, values)

    @staticmethod
    def render_fields(schema: MessageSchema, fields: Dict[str, Any]) -> Dict[str, Optional[str]]:
        """Render logical field values to wire text, keyed by wire name."""
        return {spec.wire_name: render_value(fields.get(spec.name)) for spec in schema.fields}

    @staticmethod
    def to_xml(schema: MessageSchema, values: Dict[str, Optional[str]]) -> str:
        """Serialize rendered values; empty fields are left out."""
        root = ET.Element(schema.root_tag)
        for spec in schema.fields:
            value = values.get(spec.wire_name)
            if value:
                ET.SubElement(root, spec.wire_name).text = value

        logger.debug(f"Built {schema.root_tag} with {len(root)} fields")
        return ET.tostring(root, encoding="unicode")
