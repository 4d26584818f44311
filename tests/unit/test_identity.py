import unittest

from bsvalias.error import InvalidHandleError, NotCapableError
from bsvalias.identity import (
    Identity, Capabilities, parse_handle, resolve_template, PAYMENT_DESTINATION, PAYMENT_REQUEST
)


class TestHandles(unittest.TestCase):

    def test_parse_handle(self):
        self.assertEqual(parse_handle('Alice@Example.COM'), ('alice', 'example.com'))
        self.assertEqual(parse_handle(' bob@example.org '), ('bob', 'example.org'))

    def test_invalid_handles(self):
        for handle in ('', 'alice', '@example.com', 'alice@', 'a@b@c', 'al ice@example.com', None):
            with self.assertRaises(InvalidHandleError, msg=repr(handle)):
                parse_handle(handle)


class TestCapabilities(unittest.TestCase):

    def test_lookup(self):
        capabilities = Capabilities(payment_destination='https://{domain.tld}/{alias}')
        self.assertTrue(capabilities.supports(PAYMENT_DESTINATION))
        self.assertFalse(capabilities.supports(PAYMENT_REQUEST))
        self.assertEqual(capabilities.get(PAYMENT_REQUEST), '')
        self.assertEqual(capabilities.get('unknown'), '')
        self.assertEqual(repr(capabilities), 'Capabilities(payment-destination)')

    def test_from_dict(self):
        capabilities = Capabilities.from_dict({
            'paymentDestination': 'https://a/{alias}',
            'payment-request': 'https://b/{alias}',
            'pki': 'https://c/{alias}',
        })
        self.assertEqual(capabilities, Capabilities('https://a/{alias}', 'https://b/{alias}'))

    def test_read_only(self):
        capabilities = Capabilities(payment_request='x')
        with self.assertRaises(AttributeError):
            capabilities.other = 1
        with self.assertRaises(TypeError):
            capabilities._templates[PAYMENT_REQUEST] = 'y'


class TestIdentity(unittest.TestCase):

    def test_url_for(self):
        identity = Identity.from_handle('alice@example.com', Capabilities(
            payment_destination='https://{domain.tld}/api/v1/bsvalias/p2p-payment-destination/{alias}@{domain.tld}'
        ))
        self.assertEqual(identity.handle, 'alice@example.com')
        self.assertEqual(
            identity.url_for(PAYMENT_DESTINATION),
            'https://example.com/api/v1/bsvalias/p2p-payment-destination/alice@example.com'
        )
        with self.assertRaises(NotCapableError) as cm:
            identity.url_for(PAYMENT_REQUEST)
        self.assertEqual(cm.exception.capability, PAYMENT_REQUEST)
        self.assertIn(PAYMENT_REQUEST, str(cm.exception))

    def test_resolve_template(self):
        self.assertEqual(resolve_template('https://x/{alias}/{alias}', 'a', 'h'), 'https://x/a/a')
        self.assertEqual(resolve_template('https://x/static', 'a', 'h'), 'https://x/static')
