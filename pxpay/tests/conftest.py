"""
PxPay Client - Pytest Configuration and Fixtures
"""

import logging
from decimal import Decimal
from unittest.mock import Mock

import pytest

from pxpay.protocol.pxpay_codes import Currency, TransactionType
from pxpay.protocol.pxpay_message import TransactionRequest

USER_ID = "MerchantUser"
KEY = "a" * 64

REDIRECT_URL = "https://sec.paymentexpress.com/pxmi3/EF4054F622D6C4C1B0F4B4ACD4F8C2E5"

ACCEPTED_REPLY = f'<Request valid="1"><URI>{REDIRECT_URL}</URI></Request>'

REJECTED_REPLY = (
    '<Request valid="1"><Reco>IC</Reco>'
    "<ResponseText>Invalid Key</ResponseText></Request>"
)

RESULT_REPLY = """<Response valid="1">
  <Success>1</Success>
  <TxnType>Purchase</TxnType>
  <CurrencyInput>NZD</CurrencyInput>
  <MerchantReference>Order 1001</MerchantReference>
  <TxnData1>Customer 7</TxnData1>
  <TxnData2></TxnData2>
  <AuthCode>064429</AuthCode>
  <CardName>Visa</CardName>
  <CardHolderName>J SMITH</CardHolderName>
  <CardNumber>411111........11</CardNumber>
  <DateExpiry>1230</DateExpiry>
  <ClientInfo>192.168.0.1</ClientInfo>
  <TxnId>P03E57DA8A9DD700</TxnId>
  <EmailAddress>j.smith@example.com</EmailAddress>
  <DpsTxnRef>000000060495729b</DpsTxnRef>
  <BillingId></BillingId>
  <DpsBillingId></DpsBillingId>
  <AmountSettlement>12.50</AmountSettlement>
  <CurrencySettlement>NZD</CurrencySettlement>
  <TxnMac>BD43E619</TxnMac>
  <ResponseText>APPROVED</ResponseText>
  <CardNumber2>1234567890123456</CardNumber2>
  <Cvs2ResultCode>M</Cvs2ResultCode>
</Response>"""


@pytest.fixture
def transaction_request():
    """A GenerateRequest field set that passes every schema rule."""
    return TransactionRequest(
        amount=Decimal("12.5"),
        currency=Currency.NZD,
        transaction_type=TransactionType.PURCHASE,
        url_success="https://shop.example.com/paid",
        url_fail="https://shop.example.com/failed",
        merchant_reference="Order 1001",
        txn_data1="Customer 7",
    )


@pytest.fixture
def fake_transport():
    """Transport double that answers every POST with an accepted reply."""
    transport = Mock()
    transport.post.return_value = ACCEPTED_REPLY
    return transport


@pytest.fixture
def pxpay_logger():
    """The package logger, restored to its import-time state afterwards."""
    logger = logging.getLogger("pxpay")
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    logger.addHandler(logging.NullHandler())
