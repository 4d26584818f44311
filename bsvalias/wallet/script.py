# bitcoin opcodes
OP_0 = 0x00
OP_DUP = 0x76
OP_HASH160 = 0xa9
OP_EQUALVERIFY = 0x88
OP_CHECKSIG = 0xac
OP_FALSE = OP_0
OP_RETURN = 0x6a


def push_data(data: bytes) -> bytes:
    size = len(data)
    if size < 0x4c:
        return bytes((size,)) + data
    if size <= 0xff:
        return bytes((0x4c, size)) + data
    if size <= 0xffff:
        return bytes((0x4d,)) + size.to_bytes(2, 'little') + data
    return bytes((0x4e,)) + size.to_bytes(4, 'little') + data


def pay_pubkey_hash(pubkey_hash: bytes) -> bytes:
    """ P2PKH locking script paying to a 20 byte public key hash. """
    if len(pubkey_hash) != 20:
        raise ValueError('public key hash must be 20 bytes')
    return bytes((OP_DUP, OP_HASH160)) + push_data(pubkey_hash) + bytes((OP_EQUALVERIFY, OP_CHECKSIG))


def is_pay_pubkey_hash(script: bytes) -> bool:
    return (
        len(script) == 25 and
        script[:3] == bytes((OP_DUP, OP_HASH160, 20)) and
        script[23:] == bytes((OP_EQUALVERIFY, OP_CHECKSIG))
    )


def extract_pubkey_hash(script: bytes) -> bytes:
    if not is_pay_pubkey_hash(script):
        raise ValueError('not a pay to public key hash script')
    return script[3:23]


def data_carrier(*items: bytes) -> bytes:
    """ Unspendable OP_FALSE OP_RETURN script carrying the given pushes. """
    return bytes((OP_FALSE, OP_RETURN)) + b''.join(push_data(item) for item in items)
