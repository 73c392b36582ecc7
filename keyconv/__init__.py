from keyconv.convert import from_pkcs1_pem, from_sec1_pem, to_pkcs8_pem
from keyconv.errors import (ConvertError, ConvertPkcs1Error, ConvertSec1Error,
                            DeserializeError, KeyFormatError, SerializeError)

__all__ = [
    "from_sec1_pem", "from_pkcs1_pem", "to_pkcs8_pem",
    "ConvertError", "ConvertSec1Error", "ConvertPkcs1Error",
    "DeserializeError", "SerializeError", "KeyFormatError",
]
