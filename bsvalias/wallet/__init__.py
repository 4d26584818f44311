from bsvalias.wallet.transaction import Transaction, Output, Input
from bsvalias.wallet.keys import PrivateKey, PublicKey
