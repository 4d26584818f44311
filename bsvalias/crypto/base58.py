from bsvalias.crypto.hash import double_sha256


class Base58Error(Exception):
    """ Exception used for Base58 errors. """


class Base58:
    """ Base58 and Base58Check codec used for WIF private keys. """

    chars = '123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz'
    assert len(chars) == 58
    char_map = {c: n for n, c in enumerate(chars)}

    @classmethod
    def decode(cls, txt):
        """ Decodes txt into big-endian bytes. """
        if isinstance(txt, bytes):
            txt = txt.decode()
        if not isinstance(txt, str):
            raise TypeError('a string is required')
        if not txt:
            raise Base58Error('string cannot be empty')

        value = 0
        for c in txt:
            digit = cls.char_map.get(c)
            if digit is None:
                raise Base58Error(f'invalid base 58 character "{c}"')
            value = value * 58 + digit

        body = value.to_bytes((value.bit_length() + 7) // 8, 'big')
        leading_zeros = len(txt) - len(txt.lstrip('1'))
        return b'\x00' * leading_zeros + body

    @classmethod
    def encode(cls, be_bytes):
        """ Converts big-endian bytes into a base58 string. """
        value = int.from_bytes(be_bytes, 'big')
        txt = ''
        while value:
            value, mod = divmod(value, 58)
            txt = cls.chars[mod] + txt
        leading_zeros = len(be_bytes) - len(be_bytes.lstrip(b'\x00'))
        return '1' * leading_zeros + txt

    @classmethod
    def decode_check(cls, txt, hash_fn=double_sha256):
        """ Decodes a Base58Check string to its payload, version prefix included. """
        be_bytes = cls.decode(txt)
        result, check = be_bytes[:-4], be_bytes[-4:]
        if check != hash_fn(result)[:4]:
            raise Base58Error(f'invalid base 58 checksum for {txt}')
        return result

    @classmethod
    def encode_check(cls, payload, hash_fn=double_sha256):
        """ Encodes a payload (version prefix included) into a Base58Check string. """
        return cls.encode(payload + hash_fn(payload)[:4])
