import unittest

from bsvalias.error import InvalidPrivateKeyError
from bsvalias.crypto.base58 import Base58, Base58Error
from bsvalias.wallet.keys import PrivateKey, PublicKey

SECRET_HEX = '0c28fca386c7a227600b2fe50b7cae11ec86d3bf1fbe471be89827e19d72aa1d'


class TestBase58(unittest.TestCase):

    def test_leading_zeros(self):
        self.assertEqual(Base58.encode(b'\x00\x00\x01'), '112')
        self.assertEqual(Base58.decode('112'), b'\x00\x00\x01')
        self.assertEqual(Base58.decode('1'), b'\x00')

    def test_check(self):
        encoded = Base58.encode_check(b'\x00payload')
        self.assertEqual(Base58.decode_check(encoded), b'\x00payload')
        with self.assertRaises(Base58Error):
            Base58.decode_check(encoded[:-1] + ('2' if encoded[-1] != '2' else '3'))
        with self.assertRaises(Base58Error):
            Base58.decode('0OIl')
        with self.assertRaises(Base58Error):
            Base58.decode('')


class TestPrivateKey(unittest.TestCase):

    def test_uncompressed_wif(self):
        key = PrivateKey.from_wif('5HueCGU8rMjxEXxiPuD5BDku4MkFqeZyd4dZ1jvhTVqvbTLvyTJ')
        self.assertEqual(key.private_key_bytes.hex(), SECRET_HEX)
        self.assertEqual(key.network, 'mainnet')

    def test_wif_round_trip(self):
        key = PrivateKey.from_hex(SECRET_HEX)
        again = PrivateKey.from_wif(key.wif())
        self.assertEqual(again.private_key_bytes, key.private_key_bytes)
        self.assertEqual(again.public_key, key.public_key)

        testnet = PrivateKey.generate('testnet')
        self.assertEqual(PrivateKey.from_wif(testnet.wif()).network, 'testnet')

    def test_invalid_keys(self):
        with self.assertRaises(InvalidPrivateKeyError):
            PrivateKey.from_bytes(b'\x00'*32)
        with self.assertRaises(InvalidPrivateKeyError):
            PrivateKey.from_bytes(b'\x01'*31)
        with self.assertRaises(InvalidPrivateKeyError):
            PrivateKey.from_hex('zz')
        with self.assertRaises(InvalidPrivateKeyError):
            PrivateKey.from_wif('not a wif')
        with self.assertRaises(InvalidPrivateKeyError):
            PrivateKey.from_wif(Base58.encode_check(b'\x42' + b'\x01'*32))

    def test_public_key(self):
        key = PrivateKey.from_bytes(b'\x01'*32)
        pubkey = key.public_key.pubkey_bytes
        self.assertEqual(len(pubkey), 33)
        self.assertIn(pubkey[0], (2, 3))
        self.assertEqual(PublicKey(pubkey), key.public_key)
        with self.assertRaises(ValueError):
            PublicKey(b'\x04' + pubkey[1:])

    def test_sign_digest_requires_32_bytes(self):
        key = PrivateKey.from_bytes(b'\x01'*32)
        with self.assertRaises(ValueError):
            key.sign_digest(b'\x00'*31)
