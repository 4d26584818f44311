import unittest
from binascii import hexlify
from datetime import datetime, timezone

from bsvalias.identity import Identity, Capabilities
from bsvalias.wallet.transaction import Transaction, Input, Output


class AsyncioTestCase(unittest.IsolatedAsyncioTestCase):

    maxDiff = None


class MockTransport:
    """ Records every request and answers with a canned response (or raises it). """

    def __init__(self, response=None):
        self.response = response
        self.calls = []

    @property
    def call_count(self):
        return len(self.calls)

    async def __call__(self, url, body):
        self.calls.append((url, body))
        if isinstance(self.response, BaseException):
            raise self.response
        return self.response


class FixedClock:

    def __init__(self, now=datetime(2020, 1, 2, 15, 4, 5, tzinfo=timezone.utc)):
        self.now = now

    def __call__(self):
        return self.now


def get_identity(payment_destination='https://{domain.tld}/api/{alias}/payment-destination',
                 payment_request='https://{domain.tld}/api/{alias}/payment-request',
                 handle='alice@example.com') -> Identity:
    return Identity.from_handle(handle, Capabilities(
        payment_destination=payment_destination, payment_request=payment_request
    ))


def get_output(amount=1000, pubkey_hash=b'\x11'*20) -> Output:
    return Output.pay_pubkey_hash(amount, pubkey_hash)


def get_transaction(outputs=None, with_input=True) -> Transaction:
    tx = Transaction(version=1, locktime=0)
    if with_input:
        tx.add_inputs([Input(b'\x22'*32, 1, b'', 0xFFFFFFFF)])
    return tx.add_outputs(outputs or [get_output()])


def to_hex(raw: bytes) -> str:
    return hexlify(raw).decode()