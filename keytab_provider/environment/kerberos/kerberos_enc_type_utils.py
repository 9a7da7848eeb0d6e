""" Utilities for translating between the names, enums, and keytab values of encryption types. """
# Created in October 2026
#
# Copyright 2026 - 2026 The keytab_provider authors
#
# This file is part of keytab_provider
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

from typing import Union

from keytab_provider.environment.kerberos.kerberos_constants import (
    ENCRYPTION_TYPE_ENUM_TO_CANONICAL_STR,
    ENCRYPTION_TYPE_KEY_SIZE_BYTES,
    ENCRYPTION_TYPE_STR_TO_ENUM,
    KerberosEncryptionType,
)
from keytab_provider.exceptions import UnsupportedEncryptionTypeException


def normalize_encryption_type(encryption_type: Union[str, KerberosEncryptionType]) -> KerberosEncryptionType:
    """ Given an encryption type, which may be a string alias or an enum, normalize it to an enum. """
    original = encryption_type
    if isinstance(encryption_type, str):
        # cast to lowercase for looking in our dict
        encryption_type = ENCRYPTION_TYPE_STR_TO_ENUM.get(encryption_type.strip().lower())
    if encryption_type is None or not isinstance(encryption_type, KerberosEncryptionType):
        valid_strings = sorted(ENCRYPTION_TYPE_STR_TO_ENUM.keys())
        raise UnsupportedEncryptionTypeException('Encryption type {} is not supported. Encryption types must be '
                                                 'KerberosEncryptionType enums or one of: {}'
                                                 .format(original, ', '.join(valid_strings)))
    return encryption_type


def encryption_type_from_value(value: int) -> Union[KerberosEncryptionType, int]:
    """ Convert the number read out of a keytab into an enum if we know it. Keytabs can contain
    encryption types we don't support writing (e.g. camellia, or long-dead des types), and those are
    returned as plain integers so they can be written back out unchanged.
    """
    try:
        return KerberosEncryptionType(value)
    except ValueError:
        return value


def get_canonical_encryption_type_name(encryption_type: Union[str, KerberosEncryptionType]) -> str:
    return ENCRYPTION_TYPE_ENUM_TO_CANONICAL_STR[normalize_encryption_type(encryption_type)]


def get_expected_key_length(encryption_type: Union[str, KerberosEncryptionType]) -> int:
    """ Get the size in bytes of a raw key for the given encryption type. """
    return ENCRYPTION_TYPE_KEY_SIZE_BYTES[normalize_encryption_type(encryption_type)]
