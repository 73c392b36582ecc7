# Structural errors raised while reading or writing key containers.
# All of them are ValueErrors.


class KeyFormatError(ValueError):
    pass


class FramingError(KeyFormatError):
    pass


class UnexpectedLabel(FramingError):
    pass


class Base64Error(KeyFormatError):
    pass


class TruncatedInput(KeyFormatError):
    pass


class NonMinimalLength(KeyFormatError):
    pass


class ExcessiveNesting(KeyFormatError):
    pass


class MalformedStructure(KeyFormatError):
    pass


class UnsupportedVersion(KeyFormatError):
    pass


class MissingCurveIdentifier(KeyFormatError):
    pass


class UnsupportedCurve(KeyFormatError):
    pass


class ConvertError(ValueError):
    """A conversion failed. The structural reason is kept in ``cause``."""

    cause = None

    def __init__(self, message, cause=None):
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.cause = cause


class DeserializeError(ConvertError):
    pass


class SerializeError(ConvertError):
    pass


class ConvertSec1Error(ConvertError):
    pass


class Sec1DeserializeError(ConvertSec1Error, DeserializeError):
    pass


class Sec1SerializeError(ConvertSec1Error, SerializeError):
    pass


class ConvertPkcs1Error(ConvertError):
    pass


class Pkcs1DeserializeError(ConvertPkcs1Error, DeserializeError):
    pass


class Pkcs1SerializeError(ConvertPkcs1Error, SerializeError):
    pass
