from types import MappingProxyType
from typing import Mapping, NamedTuple, Tuple

from bsvalias.error import NotCapableError, InvalidHandleError

PAYMENT_DESTINATION = 'payment-destination'
PAYMENT_REQUEST = 'payment-request'

# names used by capability documents in the wild
CAPABILITY_ALIASES = {
    'paymentDestination': PAYMENT_DESTINATION,
    'paymentRequest': PAYMENT_REQUEST,
}

ALIAS_PLACEHOLDER = '{alias}'
DOMAIN_PLACEHOLDER = '{domain.tld}'


def parse_handle(handle: str) -> Tuple[str, str]:
    """ Split alias@domain.tld into its lower cased alias and hostname. """
    if not isinstance(handle, str) or handle.count('@') != 1:
        raise InvalidHandleError(handle)
    alias, hostname = handle.strip().split('@')
    if not alias or not hostname or any(c.isspace() for c in handle.strip()):
        raise InvalidHandleError(handle)
    return alias.lower(), hostname.lower()


def resolve_template(template: str, alias: str, hostname: str) -> str:
    return template.replace(ALIAS_PLACEHOLDER, alias).replace(DOMAIN_PLACEHOLDER, hostname)


class Capabilities:
    """ Read-only view of the URL templates a site advertises, keyed by capability name. """

    __slots__ = ('_templates',)

    def __init__(self, payment_destination: str = '', payment_request: str = ''):
        self._templates = MappingProxyType({
            PAYMENT_DESTINATION: payment_destination or '',
            PAYMENT_REQUEST: payment_request or '',
        })

    @classmethod
    def from_dict(cls, capabilities: Mapping[str, str]) -> 'Capabilities':
        templates = {}
        for name, template in capabilities.items():
            name = CAPABILITY_ALIASES.get(name, name)
            if name in (PAYMENT_DESTINATION, PAYMENT_REQUEST) and isinstance(template, str):
                templates[name.replace('-', '_')] = template
        return cls(**templates)

    def get(self, name: str) -> str:
        return self._templates.get(name, '')

    def supports(self, name: str) -> bool:
        return bool(self.get(name))

    def __eq__(self, other):
        return isinstance(other, Capabilities) and dict(self._templates) == dict(other._templates)

    def __hash__(self):
        return hash(tuple(sorted(self._templates.items())))

    def __repr__(self):
        supported = [name for name, template in self._templates.items() if template]
        return f"Capabilities({', '.join(supported)})"


class Identity(NamedTuple):
    alias: str
    hostname: str
    capabilities: Capabilities

    @classmethod
    def from_handle(cls, handle: str, capabilities: Capabilities) -> 'Identity':
        alias, hostname = parse_handle(handle)
        return cls(alias, hostname, capabilities)

    @property
    def handle(self) -> str:
        return f'{self.alias}@{self.hostname}'

    def url_for(self, capability: str) -> str:
        """ Resolve the capability URL for this identity, raising if it isn't advertised. """
        template = self.capabilities.get(capability)
        if not template:
            raise NotCapableError(capability)
        return resolve_template(template, self.alias, self.hostname)
