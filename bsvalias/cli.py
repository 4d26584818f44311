import sys
import json
import asyncio
import logging
import argparse
from binascii import hexlify

from bsvalias import __version__
from bsvalias.conf import Config
from bsvalias.error import BaseError
from bsvalias.identity import Identity, Capabilities, PAYMENT_DESTINATION, PAYMENT_REQUEST
from bsvalias.messages import BASE_CURRENCY
from bsvalias.payment import PaymentDestinationClient, PaymentRequestClient
from bsvalias.transport import JSONTransport
from bsvalias.wallet.keys import PrivateKey

log = logging.getLogger(__name__)


def setup_logging(verbose=False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)-4s %(name)s:%(lineno)d: %(message)s"
    )
    logging.getLogger('aiohttp').setLevel(logging.WARNING)


def get_argument_parser():
    parser = argparse.ArgumentParser(
        prog='bsvalias', description='Request payment details from a bsvalias identity.'
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    sub = parser.add_subparsers(dest='command', metavar='COMMAND')
    sub.required = True

    destination = sub.add_parser(PAYMENT_DESTINATION, help='Get a locking script to pay the identity.')
    request = sub.add_parser(PAYMENT_REQUEST, help='Get a payment request from the identity.')
    request.add_argument(
        '--asset-id', default='', help=f'Asset to request, empty or {BASE_CURRENCY} for bitcoin.'
    )
    for command in (destination, request):
        command.add_argument('handle', help='Identity to pay, alias@domain.tld')
        command.add_argument('amount', type=int, help='Amount in satoshis.')
        command.add_argument(
            '--url-template', required=True,
            help='Capability URL advertised by the identity, with {alias} and {domain.tld} placeholders.'
        )
        command.add_argument('--purpose', default='', help='Human readable reason for the payment.')
        Config.contribute_to_argparse(command)
    return parser


def encode_output(output):
    return {'amount': output.amount, 'script': hexlify(output.script).decode()}


def encode_payment_request(payment_request):
    tx = payment_request.tx
    return {
        'tx': {
            'txid': tx.id,
            'hex': hexlify(tx.raw).decode(),
            'version': tx.version,
            'locktime': tx.locktime,
            'inputs': [{'txo': txi.txo_id, 'sequence': txi.sequence} for txi in tx.inputs],
            'outputs': [encode_output(txo) for txo in tx.outputs],
        },
        'outputs': [encode_output(txo) for txo in payment_request.outputs],
    }


async def execute(args, conf: Config):
    transport = JSONTransport.from_config(conf)
    sender_key = PrivateKey.from_wif(conf.sender_key) if conf.sender_key else None
    sender_handle = conf.sender_handle
    if args.command == PAYMENT_DESTINATION:
        identity = Identity.from_handle(args.handle, Capabilities(payment_destination=args.url_template))
        script = await PaymentDestinationClient(identity, transport).get_payment_destination(
            conf.sender_name, sender_handle, args.purpose, args.amount, sender_key
        )
        return {'output': hexlify(script).decode()}
    identity = Identity.from_handle(args.handle, Capabilities(payment_request=args.url_template))
    payment_request = await PaymentRequestClient(identity, transport).get_payment_request(
        conf.sender_name, sender_handle, args.purpose, args.asset_id, args.amount, sender_key
    )
    return encode_payment_request(payment_request)


def main(argv=None):
    parser = get_argument_parser()
    args = parser.parse_args(argv)
    try:
        conf = Config.create_from_arguments(args)
        setup_logging(conf.verbose)
        result = asyncio.run(execute(args, conf))
    except BaseError as e:
        log.debug("command failed", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1
    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
