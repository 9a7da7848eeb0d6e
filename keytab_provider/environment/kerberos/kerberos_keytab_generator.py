""" Utilities for writing keytab entries out as keytab data.

See this page for more info on the evolution of the format beyond the code comments explaining how things work
conceptually: http://manpages.ubuntu.com/manpages/artful/man3/krb5_fileformats.3.html
"""
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

from typing import Iterable, TYPE_CHECKING

if TYPE_CHECKING:
    from keytab_provider.core.keytab_entries import KeytabEntry

from keytab_provider import logging_utils

from keytab_provider.environment.kerberos.kerberos_constants import (
    ENCRYPTION_TYPE_FIELD_SIZE,
    ENTRY_LENGTH_FIELD_SIZE_BYTES,
    KEYTAB_FORMAT_SIZE_BYTES,
    KEYTAB_STANDARD_LEADING_BYTES_SIZE,
    KEYTAB_STRING_ENCODING,
    KEY_LENGTH_FIELD_SIZE_BYTES,
    LEADING_BYTE_FOR_KERBEROS_V5,
    NUM_COMPONENTS_FIELD_SIZE_BYTES,
    PREFERRED_KEYTAB_FORMAT_VERSION,
    PRINCIPAL_COMPONENT_LENGTH_FIELD_SIZE_BYTES,
    PRINCIPAL_TYPE_FIELD_SIZE_BYTES,
    REALM_LENGTH_FIELD_SIZE_BYTES,
    SUPPORTED_KEYTAB_FORMAT_VERSIONS,
    TIMESTAMP_FIELD_SIZE_BYTES,
    VNO8_FIELD_SIZE_BYTES,
    VNO32_FIELD_SIZE_BYTES,
)
from keytab_provider.exceptions import KeytabEncodingOverflowException, KeytabFormatException

logger = logging_utils.get_logger()


def write_keytab_entries_to_raw_bytes(entries: Iterable['KeytabEntry'],
                                      keytab_format_version: int = PREFERRED_KEYTAB_FORMAT_VERSION) -> bytes:
    """ Given a list of keytab entries, write them out as a single, complete keytab in the order given.
    An empty list produces a keytab with just the 2 byte header and no entries, which is still a valid
    keytab.

    Every entry is encoded before anything is returned, so if any value in any entry doesn't fit in the
    keytab format a KeytabEncodingOverflowException is raised and no partial keytab is produced.
    :param entries: The keytab entries to write.
    :param keytab_format_version: The format version to use for encoding numbers in the keytab. Defaults to 2.
    :returns: The bytes of a complete keytab file.
    """
    _validate_keytab_format_version(keytab_format_version)
    records = [write_keytab_entry_to_record_bytes(entry, keytab_format_version, entry_index=index)
               for index, entry in enumerate(entries)]
    logger.debug('Wrote %s keytab entries using keytab format version %s', len(records), keytab_format_version)
    return write_keytab_header_bytes(keytab_format_version) + b''.join(records)


def write_keytab_entries_to_raw_hex(entries: Iterable['KeytabEntry'],
                                    keytab_format_version: int = PREFERRED_KEYTAB_FORMAT_VERSION) -> str:
    """ Same as write_keytab_entries_to_raw_bytes, but returns a hex string with no leading 0x, which is handy
    for displaying keytabs or comparing them by eye.
    """
    return write_keytab_entries_to_raw_bytes(entries, keytab_format_version).hex()


def write_keytab_entries_to_file(keytab_file_path: str, entries: Iterable['KeytabEntry'],
                                 keytab_format_version: int = PREFERRED_KEYTAB_FORMAT_VERSION):
    """ Write keytab entries to a file, replacing anything already in it. The keytab is fully encoded before the
    file is opened, so an entry that can't be encoded leaves the file untouched.
    """
    keytab_data = write_keytab_entries_to_raw_bytes(entries, keytab_format_version)
    with open(keytab_file_path, 'wb') as keytab_file:
        keytab_file.write(keytab_data)
    logger.debug('Wrote %s bytes of keytab data to %s', len(keytab_data), keytab_file_path)


def write_keytab_header_bytes(keytab_format_version: int = PREFERRED_KEYTAB_FORMAT_VERSION) -> bytes:
    """ The leading 0x05 byte for kerberos v5 followed by the keytab format version. Both are single bytes, so
    there's no byte order to worry about.
    """
    _validate_keytab_format_version(keytab_format_version)
    return (LEADING_BYTE_FOR_KERBEROS_V5.to_bytes(KEYTAB_STANDARD_LEADING_BYTES_SIZE, 'big')
            + keytab_format_version.to_bytes(KEYTAB_FORMAT_SIZE_BYTES, 'big'))


def write_keytab_entry_to_record_bytes(entry: 'KeytabEntry',
                                       keytab_format_version: int = PREFERRED_KEYTAB_FORMAT_VERSION,
                                       entry_index: int = None) -> bytes:
    """ This function, given a KeytabEntry, will write it to bytes as a single keytab record. That is the
    length of the entry as a signed 32-bit number, followed by the entry itself. The keytab header is not
    included, so records can be concatenated after a header to form a keytab.

    This function is essentially the behavior of the kerberos_keytab_ingester.py file in reverse.
    :param entry: The KeytabEntry to turn into keytab data
    :param keytab_format_version: The format version to use for encoding numbers in the keytab
    :param entry_index: The position of the entry in the keytab being written. Only used to make errors
                        more useful.
    """
    _validate_keytab_format_version(keytab_format_version)
    body = bytearray()

    # the first thing we'll encode is the number of components
    num_components = len(entry.principal_components)
    # if our keytab format version is 1, then the number of components is supposed to be 1 too large because there
    # was literally a bug in the v1 format in how it accounted for components :(
    if keytab_format_version == 1:
        num_components += 1
    body += _write_number_to_bytes(num_components, NUM_COMPONENTS_FIELD_SIZE_BYTES, keytab_format_version,
                                   'principal component count', entry_index)

    # next, we write the realm
    body += _write_string_and_its_length_to_bytes(entry.realm, REALM_LENGTH_FIELD_SIZE_BYTES, keytab_format_version,
                                                  'realm', entry_index)

    # third we write our principal, one counted string per component
    for component in entry.principal_components:
        body += _write_string_and_its_length_to_bytes(component, PRINCIPAL_COMPONENT_LENGTH_FIELD_SIZE_BYTES,
                                                      keytab_format_version, 'principal component', entry_index)

    # keytab format version 1 does not include the name type
    if keytab_format_version != 1:
        body += _write_number_to_bytes(entry.name_type, PRINCIPAL_TYPE_FIELD_SIZE_BYTES, keytab_format_version,
                                       'name type', entry_index)

    # the timestamp is signed, and is stuck with the year 2038 problem like everything else that uses 32 bits
    body += _write_number_to_bytes(entry.timestamp, TIMESTAMP_FIELD_SIZE_BYTES, keytab_format_version,
                                   'timestamp', entry_index, is_signed_int=True)

    # if our kvno doesn't fit in 8 bits (>255), then we write the lower 8 bits of our kvno for the 8-bit version
    # of kvno. readers prefer the 32 bit field written at the end of the entry
    body += _write_number_to_bytes(entry.key_version & 0xFF, VNO8_FIELD_SIZE_BYTES, keytab_format_version,
                                   'key version', entry_index)

    # the keyblock: encryption type (signed, since some legacy types are negative) followed by the key as a
    # counted octet string
    body += _write_number_to_bytes(int(entry.encryption_type), ENCRYPTION_TYPE_FIELD_SIZE, keytab_format_version,
                                   'encryption type', entry_index, is_signed_int=True)
    body += _write_bytes_and_their_length(entry.key, KEY_LENGTH_FIELD_SIZE_BYTES, keytab_format_version,
                                          'key', entry_index)

    # now write the 32-bit version of our key version number
    body += _write_number_to_bytes(entry.key_version, VNO32_FIELD_SIZE_BYTES, keytab_format_version,
                                   'key version', entry_index)

    # entry length is signed because negative lengths mark deleted entries
    entry_length_field = _write_number_to_bytes(len(body), ENTRY_LENGTH_FIELD_SIZE_BYTES, keytab_format_version,
                                                'entry length', entry_index, is_signed_int=True)
    return entry_length_field + bytes(body)


def _validate_keytab_format_version(keytab_format_version: int):
    if keytab_format_version not in SUPPORTED_KEYTAB_FORMAT_VERSIONS:
        raise KeytabFormatException('Invalid keytab format version {}. Format version must be 1 or 2'
                                    .format(keytab_format_version))


def _byte_order_for_format_version(keytab_format_version: int) -> str:
    if keytab_format_version == 1:
        return 'little'
    return 'big'


def _write_number_to_bytes(number_to_write: int, number_repr_size_in_bytes: int, keytab_format_version: int,
                           field: str, entry_index: int = None, is_signed_int: bool = False) -> bytes:
    """ Write any number to bytes, while allocating the number of bytes specified.
    Number fields in a keytab occupy a fixed size, so a number that doesn't fit is an error rather than
    something we can truncate.
    """
    byte_order = _byte_order_for_format_version(keytab_format_version)
    try:
        return number_to_write.to_bytes(number_repr_size_in_bytes, byte_order, signed=is_signed_int)
    except OverflowError:
        raise KeytabEncodingOverflowException('The {} value {} does not fit in the {} byte {} field used for it '
                                              'in a keytab'.format(field, number_to_write, number_repr_size_in_bytes,
                                                                   'signed' if is_signed_int else 'unsigned'),
                                              field=field, entry_index=entry_index)


def _write_bytes_and_their_length(data: bytes, size_of_length_field_bytes: int, keytab_format_version: int,
                                  field: str, entry_index: int = None) -> bytes:
    """ Write a counted octet string - the length of the data followed by the data itself. """
    max_length = 2 ** (8 * size_of_length_field_bytes) - 1
    if len(data) > max_length:
        raise KeytabEncodingOverflowException('The {} is {} bytes long, but the longest {} a keytab can hold is {} '
                                              'bytes'.format(field, len(data), field, max_length),
                                              field=field, entry_index=entry_index)
    length_bytes = _write_number_to_bytes(len(data), size_of_length_field_bytes, keytab_format_version, field,
                                          entry_index)
    return length_bytes + data


def _write_string_and_its_length_to_bytes(any_string: str, size_of_length_field_bytes: int,
                                          keytab_format_version: int, field: str, entry_index: int = None) -> bytes:
    """ Write any string, and the information needed to read it back from a keytab, to bytes.
    Strings are free-form, like principals and realms, so all string fields encode their length before them.
    The length is the length of the encoded string in bytes, not in characters.
    """
    return _write_bytes_and_their_length(any_string.encode(KEYTAB_STRING_ENCODING), size_of_length_field_bytes,
                                         keytab_format_version, field, entry_index)
