""" In-memory representations of keytab entries. """
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

import calendar

from datetime import datetime
from typing import Sequence, Tuple, Union

import pytz

from keytab_provider.environment.kerberos.kerberos_constants import (
    DEFAULT_PRINCIPAL_NAME_TYPE,
    ENCRYPTION_TYPE_ENUM_TO_CANONICAL_STR,
    KEYTAB_STRING_ENCODING,
    NAME_TYPE_VALUE_TO_NAME_TYPE_MAP,
    PRINCIPAL_COMPONENT_DIVIDER,
    KerberosEncryptionType,
)
from keytab_provider.environment.kerberos.kerberos_enc_type_utils import (
    encryption_type_from_value,
    normalize_encryption_type,
)
from keytab_provider.exceptions import InvalidKeytabEntryException


def datetime_to_unix_timestamp(moment: datetime) -> int:
    """ Convert a datetime to whole seconds since the epoch. Naive datetimes are assumed to be UTC,
    which is what every keytab tool assumes too.
    """
    if moment.tzinfo is None:
        moment = pytz.utc.localize(moment)
    return calendar.timegm(moment.astimezone(pytz.utc).utctimetuple())


def _split_principal(principal: Union[str, Sequence[str]]) -> Tuple[str, ...]:
    if isinstance(principal, str):
        return tuple(principal.split(PRINCIPAL_COMPONENT_DIVIDER))
    return tuple(principal)


def _check_text_is_encodable(text: str):
    # lone surrogates and the like make it into python strings but have no UTF-8 encoding
    try:
        text.encode(KEYTAB_STRING_ENCODING)
    except UnicodeEncodeError as ex:
        raise InvalidKeytabEntryException('{!r} cannot be written to a keytab because it is not valid {} text: {}'
                                          .format(text, KEYTAB_STRING_ENCODING, ex.reason))


class KeytabEntry:
    """ A single keytab entry - a raw kerberos key along with the principal it belongs to, the
    key version, the encryption type the key is used with, and when it was written.

    The principal may be given either as a string, in which case it's split on forward slashes into
    its components (e.g. HTTP/server.example.com has two components), or as a sequence of components.
    Values are checked for type, emptiness and encodability here. Whether they fit in a keytab is
    checked when the entry is written, since that's the only time it matters.

    Entries are read-only once created, so a keytab built from them always writes the same bytes.
    """
    __slots__ = ('_principal_components', '_realm', '_key', '_key_version', '_encryption_type', '_timestamp',
                 '_name_type')

    def __init__(self, principal: Union[str, Sequence[str]], realm: str, key: bytes, key_version: int,
                 encryption_type: Union[str, int, KerberosEncryptionType], timestamp: Union[int, datetime],
                 name_type: int = DEFAULT_PRINCIPAL_NAME_TYPE):
        components = _split_principal(principal)
        if not components:
            raise InvalidKeytabEntryException('A principal must have at least one component')
        for component in components:
            if not isinstance(component, str) or not component:
                raise InvalidKeytabEntryException('Principal components must be non-empty strings. Got {!r} in '
                                                  'principal {!r}'.format(component, principal))
        if not isinstance(realm, str) or not realm:
            raise InvalidKeytabEntryException('A realm must be a non-empty string. Got {!r}'.format(realm))
        for text in components + (realm,):
            _check_text_is_encodable(text)
        if not isinstance(key, (bytes, bytearray)):
            raise InvalidKeytabEntryException('Keys must be raw bytes, not {}'.format(type(key).__name__))
        if not isinstance(key_version, int) or key_version < 0:
            raise InvalidKeytabEntryException('Key versions must be non-negative integers. Got {!r}'
                                              .format(key_version))
        if isinstance(timestamp, datetime):
            timestamp = datetime_to_unix_timestamp(timestamp)
        if not isinstance(timestamp, int):
            raise InvalidKeytabEntryException('Timestamps must be datetimes or integer seconds since the epoch. '
                                              'Got {!r}'.format(timestamp))
        if not isinstance(name_type, int) or name_type < 0:
            raise InvalidKeytabEntryException('Name types must be non-negative integers. Got {!r}'.format(name_type))

        # strings are aliases for encryption types we support. numbers are passed through as-is so that
        # keytabs with encryption types we don't recognize can be read and written back out
        if isinstance(encryption_type, str):
            encryption_type = normalize_encryption_type(encryption_type)
        elif isinstance(encryption_type, int):
            encryption_type = encryption_type_from_value(encryption_type)
        else:
            raise InvalidKeytabEntryException('Encryption types must be strings, integers, or '
                                              'KerberosEncryptionType enums. Got {!r}'.format(encryption_type))

        self._principal_components = components
        self._realm = realm
        self._key = bytes(key)
        self._key_version = key_version
        self._encryption_type = encryption_type
        self._timestamp = timestamp
        self._name_type = name_type

    @property
    def principal_components(self) -> Tuple[str, ...]:
        return self._principal_components

    @property
    def realm(self) -> str:
        return self._realm

    @property
    def key(self) -> bytes:
        return self._key

    @property
    def key_version(self) -> int:
        return self._key_version

    @property
    def encryption_type(self) -> Union[KerberosEncryptionType, int]:
        return self._encryption_type

    @property
    def timestamp(self) -> int:
        return self._timestamp

    @property
    def name_type(self) -> int:
        return self._name_type

    @property
    def principal(self) -> str:
        return PRINCIPAL_COMPONENT_DIVIDER.join(self.principal_components)

    @property
    def timestamp_datetime(self) -> datetime:
        return datetime.fromtimestamp(self.timestamp, tz=pytz.utc)

    @property
    def friendly_name_type(self) -> str:
        # name type is flavor text, so allow values we have no name for
        return NAME_TYPE_VALUE_TO_NAME_TYPE_MAP.get(self.name_type)

    @property
    def encryption_type_name(self) -> str:
        """ The canonical name of our encryption type, or the raw number if we don't know it """
        return ENCRYPTION_TYPE_ENUM_TO_CANONICAL_STR.get(self.encryption_type, str(int(self.encryption_type)))

    def get_raw_hex_encoded_key(self) -> str:
        return self.key.hex()

    def _identity(self):
        return (self.principal_components, self.realm, self.key, self.key_version, int(self.encryption_type),
                self.timestamp, self.name_type)

    def __eq__(self, other):
        if not isinstance(other, KeytabEntry):
            return NotImplemented
        return self._identity() == other._identity()

    def __hash__(self):
        return hash(self._identity())

    def __repr__(self):
        # never include the key itself, since these end up in logs
        return ('KeytabEntry(principal={!r}, realm={!r}, key_version={}, encryption_type={}, timestamp={}, '
                'name_type={})'.format(self.principal, self.realm, self.key_version, self.encryption_type_name,
                                       self.timestamp, self.name_type))
