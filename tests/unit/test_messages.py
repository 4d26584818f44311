import unittest
from datetime import datetime, timezone, timedelta

from bsvalias.error import InvalidAmountError, MissingSenderHandleError, FormatError, UnexpectedResponseFieldError
from bsvalias.messages import (
    format_datetime, PaymentDestinationRequest, PaymentRequestRequest,
    PaymentDestinationResponse, PaymentRequestResponse, MAX_AMOUNT, OUTPUT_PROTOCOL_VERSION, OUTPUT_TX_VERSION
)


class TestRequests(unittest.TestCase):

    def test_format_datetime(self):
        self.assertEqual(
            format_datetime(datetime(2020, 1, 2, 15, 4, 5, 999, tzinfo=timezone.utc)), '2020-01-02T15:04:05Z'
        )
        eastern = timezone(timedelta(hours=-5))
        self.assertEqual(format_datetime(datetime(2020, 1, 2, 10, 4, 5, tzinfo=eastern)), '2020-01-02T15:04:05Z')
        self.assertEqual(format_datetime(datetime(2020, 1, 2, 15, 4, 5)), '2020-01-02T15:04:05Z')

    def test_amount_bounds(self):
        PaymentDestinationRequest('Bob', 'bob@x.com', 'dt', 0)
        PaymentDestinationRequest('Bob', 'bob@x.com', 'dt', MAX_AMOUNT)
        for amount in (-1, MAX_AMOUNT + 1, 1.5, True, '10'):
            with self.assertRaises(InvalidAmountError, msg=repr(amount)):
                PaymentDestinationRequest('Bob', 'bob@x.com', 'dt', amount)
        with self.assertRaises(ValueError):
            PaymentRequestRequest('Bob', 'bob@x.com', 'dt', -5)

    def test_sender_handle_required(self):
        with self.assertRaises(MissingSenderHandleError):
            PaymentRequestRequest('Bob', '', 'dt', 5)

    def test_with_signature_is_a_copy(self):
        request = PaymentRequestRequest('Bob', 'bob@x.com', 'dt', 5, 'p', asset_id='BSV')
        signed = request.with_signature('3045')
        self.assertEqual(request.signature, '')
        self.assertEqual(signed.signature, '3045')
        self.assertEqual(signed.asset_id, 'BSV')
        self.assertEqual(signed.to_dict()['signature'], '3045')

    def test_large_amount_in_json(self):
        self.assertEqual(PaymentDestinationRequest('Bob', 'b@x.com', 'dt', MAX_AMOUNT).to_dict()['amount'], MAX_AMOUNT)


class TestResponses(unittest.TestCase):

    def test_output_versions(self):
        self.assertEqual((OUTPUT_PROTOCOL_VERSION, OUTPUT_TX_VERSION), (1, 1))

    def test_destination_fields(self):
        self.assertEqual(PaymentDestinationResponse.from_dict({'output': '76'}).locking_script(), b'\x76')
        with self.assertRaises(FormatError):
            PaymentDestinationResponse.from_dict(None)

    def test_request_fields(self):
        with self.assertRaises(FormatError):
            PaymentRequestResponse.from_dict({'paymentRequest': '00'})
        with self.assertRaises(FormatError):
            PaymentRequestResponse.from_dict({'paymentRequest': '00', 'outputs': 'ab'})
        with self.assertRaises(UnexpectedResponseFieldError) as cm:
            PaymentRequestResponse.from_dict({'paymentRequest': '00', 'outputs': [], 'fee': 1, 'memo': ''})
        self.assertEqual(cm.exception.fields, ['fee', 'memo'])
        response = PaymentRequestResponse.from_dict({'paymentRequest': '00', 'outputs': ['aa', 'bb']})
        self.assertEqual(response.outputs, ('aa', 'bb'))
