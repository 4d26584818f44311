from .base import BaseError


class UserInputError(BaseError):
    """
    User input errors.
    """


class InputValueError(UserInputError, ValueError):
    """
    Invalid argument value provided to a request.
    """


class InvalidAmountError(InputValueError):

    def __init__(self, amount):
        self.amount = amount
        super().__init__(f"Amount must be an unsigned 64-bit integer, got '{amount}'.")


class MissingSenderHandleError(InputValueError):

    def __init__(self):
        super().__init__("Sender handle is required.")


class InvalidHandleError(InputValueError):
    """
    Handles have the form alias@domain.tld
    """

    def __init__(self, handle):
        self.handle = handle
        super().__init__(f"Invalid handle: '{handle}'")


class InvalidPrivateKeyError(InputValueError):

    def __init__(self, reason):
        self.reason = reason
        super().__init__(f"Invalid private key: {reason}")


class ConfigurationError(BaseError):
    """
    Configuration errors.
    """


class ConfigReadError(ConfigurationError):
    """
    Can't open the config file user provided via command line args.
    """

    def __init__(self, path):
        self.path = path
        super().__init__(f"Cannot open configuration file '{path}'")


class ConfigFormatError(ConfigurationError):
    """
    Configuration files must be YAML mappings with a .yml or .yaml extension.
    """

    def __init__(self, path, reason):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid configuration file '{path}': {reason}")


class InvalidSettingError(ConfigurationError):

    def __init__(self, name, value):
        self.name = name
        self.value = value
        super().__init__(f"Invalid value for setting '{name}': '{value}'")


class SerializationError(BaseError):
    """
    Binary transaction data could not be read or written.
    """

    def __init__(self, reason):
        self.reason = reason
        super().__init__(f"Serialization failed: {reason}")


class PaymentProtocolError(BaseError):
    """
    Failures while exchanging a request with an identity service.
    """


class NotCapableError(PaymentProtocolError):
    """
    The identity's site does not advertise the capability, no request is sent.
    """

    def __init__(self, capability):
        self.capability = capability
        super().__init__(f"Identity is not capable of '{capability}'.")


class SigningError(PaymentProtocolError):
    """
    Stage is either 'signature hash' or 'sign'.
    """

    def __init__(self, stage, reason):
        self.stage = stage
        self.reason = reason
        super().__init__(f"{stage}: {reason}")


class TransportError(PaymentProtocolError):

    stage = 'http get'

    def __init__(self, url, reason):
        self.url = url
        self.reason = reason
        super().__init__(f"{self.stage} {url}: {reason}")


class FormatError(PaymentProtocolError):
    """
    The counterparty response is malformed or uses an incompatible encoding.
    """

    def __init__(self, stage, reason, position=None):
        self.stage = stage
        self.reason = reason
        self.position = position
        if position is None:
            super().__init__(f"{stage}: {reason}")
        else:
            super().__init__(f"{stage} {position}: {reason}")


class MissingResponseFieldError(FormatError):

    def __init__(self, field):
        self.field = field
        super().__init__('response', f"missing or invalid field '{field}'")


class UnexpectedResponseFieldError(FormatError):

    def __init__(self, fields):
        self.fields = fields
        super().__init__('response', f"unexpected field(s) {', '.join(repr(f) for f in fields)}")


class EmptyResultError(PaymentProtocolError):
    """
    Decoding succeeded but produced nothing where a value is required.
    """


class EmptyLockingScriptError(EmptyResultError):

    def __init__(self):
        super().__init__("Empty locking script")
