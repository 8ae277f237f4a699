"""
PxPay Response Decoder

Decodes the two gateway replies:
- <Request valid="1"><URI>...</URI></Request> for a GenerateRequest
- <Response valid="1">...</Response> for a ProcessResponse
"""

import logging
from typing import Optional

from pxpay.core.exceptions import PxPayProtocolError
from pxpay.protocol.pxpay_codes import response_message
from pxpay.protocol.pxpay_message import TransactionResult
from pxpay.protocol.tag_stream import TagStream

logger = logging.getLogger(__name__)


def is_truthy(value: Optional[str]) -> bool:
    """Wire flags are "1"/"0"; absent or empty counts as false."""
    return bool(value) and value != "0"


def decode_transaction_response(xml: str) -> str:
    """
    Decode the reply to a GenerateRequest into the hosted page URL.

    Raises:
        PxPayParseError: If the reply is not well-formed XML
        PxPayProtocolError: If the request was rejected
    """
    stream = TagStream(xml)

    if not is_truthy(stream.get_attribute("Request", "valid")):
        raise PxPayProtocolError("request invalid")

    url = stream.get_value("Request/URI")
    if url:
        return url

    code = stream.get_value("Request/Reco")
    if code is None:
        logger.warning("GenerateRequest reply has neither URI nor Reco")
        raise PxPayProtocolError("reply has no URI and no response code")

    message = response_message(code)
    logger.warning(f"GenerateRequest rejected by gateway: {code} {message}")
    raise PxPayProtocolError(message, response_code=code)


def decode_result(xml: str) -> TransactionResult:
    """
    Decode the reply to a ProcessResponse into a TransactionResult.

    An invalid response is not an error; it is reported through is_valid.

    Raises:
        PxPayParseError: If the reply is not well-formed XML
    """
    stream = TagStream(xml)

    def value(tag: str) -> Optional[str]:
        return stream.get_value(f"Response/{tag}")

    result = TransactionResult(
        is_valid=is_truthy(stream.get_attribute("Response", "valid")),
        success=is_truthy(value("Success")),
        amount_settlement=value("AmountSettlement"),
        auth_code=value("AuthCode"),
        billing_id=value("BillingId"),
        card_holder_name=value("CardHolderName"),
        card_name=value("CardName"),
        card_number=value("CardNumber"),
        card_number2=value("CardNumber2"),
        client_info=value("ClientInfo"),
        currency_input=value("CurrencyInput"),
        currency_settlement=value("CurrencySettlement"),
        cvs2_result_code=value("Cvs2ResultCode"),
        date_expiry=value("DateExpiry"),
        dps_billing_id=value("DpsBillingId"),
        dps_txn_ref=value("DpsTxnRef"),
        email_address=value("EmailAddress"),
        merchant_reference=value("MerchantReference"),
        response_text=value("ResponseText"),
        txn_data1=value("TxnData1"),
        txn_data2=value("TxnData2"),
        txn_data3=value("TxnData3"),
        txn_id=value("TxnId"),
        txn_mac=value("TxnMac"),
        txn_type=value("TxnType"),
    )

    if not result.is_valid:
        logger.warning("Gateway returned a result marked invalid")
    return result
