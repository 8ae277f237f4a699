"""
Tests for PxPay request validation and serialization
"""

import dataclasses
import xml.etree.ElementTree as ET
from decimal import Decimal

import pytest

from pxpay.core.exceptions import PxPayValidationError, ValidationReason
from pxpay.protocol.pxpay_builder import PxPayBuilder, format_amount, render_value
from pxpay.protocol.pxpay_codes import Currency, TransactionType
from pxpay.protocol.pxpay_message import ResultRequest, TransactionRequest
from pxpay.protocol.pxpay_schema import GENERATE_REQUEST_SCHEMA, PROCESS_RESPONSE_SCHEMA
from pxpay.protocol.pxpay_validator import (
    PxPayValidator,
    is_numeric_amount,
    is_supported_currency,
    is_supported_transaction_type,
)
from pxpay.protocol.tag_stream import TagStream
from pxpay.tests.conftest import KEY, USER_ID


@pytest.fixture
def builder():
    return PxPayBuilder()


def build(builder, request, user_id=USER_ID, key=KEY):
    return builder.build_generate_request(request, user_id, key)


class TestFormatAmount:
    """Tests for amount formatting."""

    @pytest.mark.parametrize(
        "amount,expected",
        [
            (Decimal("12.5"), "12.50"),
            (10, "10.00"),
            (1.005, "1.01"),
            ("1800", "1800.00"),
            ("0.125", "0.13"),
            (Decimal("1234567.891"), "1234567.89"),
        ],
    )
    def test_two_decimal_places(self, amount, expected):
        """Test amounts are fixed point with two decimals and no separators."""
        assert format_amount(amount) == expected

    def test_absent_amount(self):
        """Test a missing amount stays missing."""
        assert format_amount(None) is None
        assert format_amount("") is None

    def test_non_numeric_passed_through(self):
        """Test text that is not a number is left for the validator."""
        assert format_amount("twelve") == "twelve"

    def test_beyond_decimal_precision(self):
        """Test an amount with more digits than the decimal context is written out in full."""
        assert format_amount("1e30") == "1" + "0" * 30
        assert format_amount(10 ** 27) == "1" + "0" * 27


class TestRenderValue:
    """Tests for field rendering."""

    def test_enums_render_wire_code(self):
        """Test enum members render as their wire codes."""
        assert render_value(Currency.NZD) == "NZD"
        assert render_value(TransactionType.AUTH) == "Auth"

    def test_booleans(self):
        """Test true renders as 1 and false is omitted."""
        assert render_value(True) == "1"
        assert render_value(False) is None

    def test_empty_string_omitted(self):
        """Test empty text is treated as absent."""
        assert render_value("") is None


class TestSerialization:
    """Tests for GenerateRequest / ProcessResponse XML."""

    def test_root_and_field_order(self, builder, transaction_request):
        """Test children follow schema order and empty fields are dropped."""
        xml = build(builder, transaction_request)
        root = ET.fromstring(xml)

        assert root.tag == "GenerateRequest"
        assert [child.tag for child in root] == [
            "PxPayUserId",
            "PxPayKey",
            "AmountInput",
            "CurrencyInput",
            "MerchantReference",
            "TxnData1",
            "TxnType",
            "UrlFail",
            "UrlSuccess",
        ]

    def test_no_xml_declaration(self, builder, transaction_request):
        """Test the document starts with the root element."""
        assert build(builder, transaction_request).startswith("<GenerateRequest>")

    def test_round_trip_through_tag_stream(self, builder, transaction_request):
        """Test every serialized field reads back through the tag stream."""
        request = dataclasses.replace(
            transaction_request,
            billing_id="BILL-1",
            email_address="j.smith@example.com",
            enable_add_bill_card=True,
            txn_data2="two",
            txn_data3="three",
            txn_id="T0001",
            opt="TO=1810041200",
        )
        stream = TagStream(build(builder, request))

        def value(tag):
            return stream.get_value(f"GenerateRequest/{tag}")

        assert value("PxPayUserId") == USER_ID
        assert value("PxPayKey") == KEY
        assert value("AmountInput") == "12.50"
        assert value("CurrencyInput") == "NZD"
        assert value("TxnType") == "Purchase"
        assert value("UrlSuccess") == request.url_success
        assert value("UrlFail") == request.url_fail
        assert value("MerchantReference") == "Order 1001"
        assert value("TxnData1") == "Customer 7"
        assert value("TxnData2") == "two"
        assert value("TxnData3") == "three"
        assert value("BillingId") == "BILL-1"
        assert value("EmailAddress") == "j.smith@example.com"
        assert value("EnableAddBillCard") == "1"
        assert value("TxnId") == "T0001"
        assert value("Opt") == "TO=1810041200"
        assert value("DpsBillingId") is None

    def test_values_are_escaped(self, builder, transaction_request):
        """Test markup characters in values cannot break the document."""
        request = dataclasses.replace(transaction_request, merchant_reference="A&B <Ltd>")
        xml = build(builder, request)

        assert "A&amp;B &lt;Ltd&gt;" in xml
        assert TagStream(xml).get_value("GenerateRequest/MerchantReference") == "A&B <Ltd>"

    def test_string_codes_accepted(self, builder, transaction_request):
        """Test plain strings work in place of enum members."""
        request = dataclasses.replace(transaction_request, currency="AUD", transaction_type="Auth")
        stream = TagStream(build(builder, request))

        assert stream.get_value("GenerateRequest/CurrencyInput") == "AUD"
        assert stream.get_value("GenerateRequest/TxnType") == "Auth"

    def test_process_response(self, builder):
        """Test the ProcessResponse document."""
        xml = builder.build_process_response(ResultRequest(response="v5n3a1token"), USER_ID, KEY)

        assert xml == (
            f"<ProcessResponse><PxPayUserId>{USER_ID}</PxPayUserId>"
            f"<PxPayKey>{KEY}</PxPayKey><Response>v5n3a1token</Response></ProcessResponse>"
        )


class TestRequiredFields:
    """Tests for required field enforcement."""

    @pytest.mark.parametrize(
        "field,wire_name",
        [
            ("amount", "AmountInput"),
            ("currency", "CurrencyInput"),
            ("transaction_type", "TxnType"),
            ("url_fail", "UrlFail"),
            ("url_success", "UrlSuccess"),
        ],
    )
    def test_missing_field(self, builder, transaction_request, field, wire_name):
        """Test each required request field is named when missing."""
        request = dataclasses.replace(transaction_request, **{field: None})

        with pytest.raises(PxPayValidationError) as exc_info:
            build(builder, request)

        assert exc_info.value.field == wire_name
        assert exc_info.value.reason is ValidationReason.MISSING
        assert exc_info.value.message == f"{wire_name} is missing"

    def test_missing_credentials(self, builder, transaction_request):
        """Test missing credentials are reported before request fields."""
        with pytest.raises(PxPayValidationError) as exc_info:
            build(builder, dataclasses.replace(transaction_request, amount=None), user_id="")
        assert exc_info.value.field == "PxPayUserId"

        with pytest.raises(PxPayValidationError) as exc_info:
            build(builder, transaction_request, key=None)
        assert exc_info.value.field == "PxPayKey"

    def test_declaration_order(self, builder):
        """Test the first missing field in schema order is reported."""
        with pytest.raises(PxPayValidationError) as exc_info:
            build(builder, TransactionRequest())
        assert exc_info.value.field == "AmountInput"

    def test_missing_token(self, builder):
        """Test a ProcessResponse needs a token."""
        with pytest.raises(PxPayValidationError) as exc_info:
            builder.build_process_response(ResultRequest(response=""), USER_ID, KEY)
        assert exc_info.value.field == "Response"


class TestFieldLengths:
    """Tests for maximum length enforcement."""

    @pytest.mark.parametrize(
        "field,wire_name,limit",
        [
            ("merchant_reference", "MerchantReference", 64),
            ("txn_id", "TxnId", 16),
            ("billing_id", "BillingId", 32),
            ("dps_billing_id", "DpsBillingId", 16),
            ("txn_data1", "TxnData1", 255),
            ("email_address", "EmailAddress", 255),
            ("url_success", "UrlSuccess", 255),
            ("opt", "Opt", 64),
        ],
    )
    def test_too_long(self, builder, transaction_request, field, wire_name, limit):
        """Test a value one past the limit is rejected with the limit."""
        request = dataclasses.replace(transaction_request, **{field: "x" * (limit + 1)})

        with pytest.raises(PxPayValidationError) as exc_info:
            build(builder, request)

        error = exc_info.value
        assert error.field == wire_name
        assert error.reason is ValidationReason.TOO_LONG
        assert error.limit == limit
        assert error.context["limit"] == limit
        assert error.message == f"{wire_name} cannot be more than {limit} characters"

    def test_at_limit(self, builder, transaction_request):
        """Test a value exactly at the limit is accepted."""
        request = dataclasses.replace(transaction_request, merchant_reference="x" * 64)
        build(builder, request)

    def test_amount_too_long(self, builder, transaction_request):
        """Test the formatted amount is length checked."""
        request = dataclasses.replace(transaction_request, amount=Decimal("1234567890123"))

        with pytest.raises(PxPayValidationError) as exc_info:
            build(builder, request)
        assert exc_info.value.field == "AmountInput"
        assert exc_info.value.limit == 13

    @pytest.mark.parametrize("amount", ["1e30", Decimal("1E+27"), 10 ** 27])
    def test_huge_amount_too_long(self, builder, transaction_request, amount):
        """Test amounts too large to round are reported as too long."""
        request = dataclasses.replace(transaction_request, amount=amount)

        with pytest.raises(PxPayValidationError) as exc_info:
            build(builder, request)

        assert exc_info.value.field == "AmountInput"
        assert exc_info.value.reason is ValidationReason.TOO_LONG
        assert exc_info.value.limit == 13

    def test_user_id_too_long(self, builder, transaction_request):
        """Test credentials are length checked."""
        with pytest.raises(PxPayValidationError) as exc_info:
            build(builder, transaction_request, user_id="u" * 33)
        assert exc_info.value.field == "PxPayUserId"
        assert exc_info.value.limit == 32

    def test_length_checked_before_semantics(self, builder, transaction_request):
        """Test a too long field wins over an unsupported currency."""
        request = dataclasses.replace(transaction_request, currency="XXXXX")

        with pytest.raises(PxPayValidationError) as exc_info:
            build(builder, request)
        assert exc_info.value.reason is ValidationReason.TOO_LONG


class TestSemanticChecks:
    """Tests for amount, currency and transaction type checks."""

    def test_non_numeric_amount(self, builder, transaction_request):
        """Test an amount that is not a number is rejected."""
        request = dataclasses.replace(transaction_request, amount="12.5x")

        with pytest.raises(PxPayValidationError) as exc_info:
            build(builder, request)
        assert exc_info.value.field == "AmountInput"
        assert exc_info.value.reason is ValidationReason.NOT_NUMERIC

    def test_unsupported_currency(self, builder, transaction_request):
        """Test XXX is rejected and NZD passes."""
        with pytest.raises(PxPayValidationError) as exc_info:
            build(builder, dataclasses.replace(transaction_request, currency="XXX"))
        assert exc_info.value.field == "CurrencyInput"
        assert exc_info.value.reason is ValidationReason.UNSUPPORTED_CURRENCY

        build(builder, dataclasses.replace(transaction_request, currency="NZD"))

    def test_unsupported_transaction_type(self, builder, transaction_request):
        """Test only Auth and Purchase are accepted."""
        with pytest.raises(PxPayValidationError) as exc_info:
            build(builder, dataclasses.replace(transaction_request, transaction_type="Refund"))
        assert exc_info.value.field == "TxnType"
        assert exc_info.value.reason is ValidationReason.UNSUPPORTED_TRANSACTION_TYPE

    def test_check_helpers(self):
        """Test the individual field checks."""
        assert is_numeric_amount("1.80") is None
        assert is_numeric_amount("NaN") is ValidationReason.NOT_NUMERIC
        assert is_numeric_amount(None) is ValidationReason.NOT_NUMERIC
        assert is_supported_currency("USD") is None
        assert is_supported_currency("usd") is ValidationReason.UNSUPPORTED_CURRENCY
        assert is_supported_transaction_type("Purchase") is None
        assert is_supported_transaction_type("purchase") is not None


class TestSchemas:
    """Tests for the schema definitions."""

    def test_generate_request_wire_names_unique(self):
        """Test every field maps to its own wire tag."""
        names = GENERATE_REQUEST_SCHEMA.wire_names
        assert len(names) == len(set(names)) == 17

    def test_required_fields(self):
        """Test the required set of the GenerateRequest."""
        required = [f.wire_name for f in GENERATE_REQUEST_SCHEMA.fields if f.required]
        assert required == [
            "PxPayUserId",
            "PxPayKey",
            "AmountInput",
            "CurrencyInput",
            "TxnType",
            "UrlFail",
            "UrlSuccess",
        ]

    def test_field_lookup(self):
        """Test looking up a field spec by name."""
        assert GENERATE_REQUEST_SCHEMA.field("txn_id").max_length == 16
        with pytest.raises(KeyError):
            GENERATE_REQUEST_SCHEMA.field("nope")

    def test_validator_name(self):
        """Test validator naming."""
        assert PxPayValidator(PROCESS_RESPONSE_SCHEMA).name == "PxPayValidator[ProcessResponse]"
