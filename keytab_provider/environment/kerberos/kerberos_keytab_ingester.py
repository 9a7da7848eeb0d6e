""" Utilities for parsing keytab data into keytab entries. """
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

import os

from typing import List, Tuple

from keytab_provider import logging_utils

from keytab_provider.core.keytab_entries import KeytabEntry
# constants for structuring in-memory keytab representations
from keytab_provider.environment.kerberos.kerberos_constants import (
    FORMAT_VERSION_1_NAME_TYPE,
    KEYTAB_STRING_ENCODING,
    LEADING_BYTE_FOR_KERBEROS_V5,
    SUPPORTED_KEYTAB_FORMAT_VERSIONS,
)

# constants for parsing keytab data, as a separate import for improved readability
from keytab_provider.environment.kerberos.kerberos_constants import (
    ENCRYPTION_TYPE_FIELD_SIZE,
    ENTRY_LENGTH_FIELD_SIZE_BYTES,
    KEYTAB_STANDARD_LEADING_BYTES_SIZE,
    KEYTAB_FORMAT_SIZE_BYTES,
    KEY_LENGTH_FIELD_SIZE_BYTES,
    NUM_COMPONENTS_FIELD_SIZE_BYTES,
    REALM_LENGTH_FIELD_SIZE_BYTES,
    PRINCIPAL_COMPONENT_LENGTH_FIELD_SIZE_BYTES,
    PRINCIPAL_TYPE_FIELD_SIZE_BYTES,
    TIMESTAMP_FIELD_SIZE_BYTES,
    VNO8_FIELD_SIZE_BYTES,
    VNO32_FIELD_SIZE_BYTES,
)
from keytab_provider.environment.kerberos.kerberos_enc_type_utils import encryption_type_from_value
from keytab_provider.exceptions import KeytabFormatException

logger = logging_utils.get_logger()

KEYTAB_HEADER_SIZE_BYTES = KEYTAB_STANDARD_LEADING_BYTES_SIZE + KEYTAB_FORMAT_SIZE_BYTES


def process_keytab_bytes_to_extract_entries(keytab: bytes) -> List[KeytabEntry]:
    """ Given a byte string of binary keytab data, extract all of the entries in it, in the order they
    appear, and return them as KeytabEntry objects.
    Deleted entries (negative record lengths) are skipped. Truncated or malformed data raises a
    KeytabFormatException rather than being partially read.
    """
    keytab_format_version = read_keytab_format_version(keytab)
    logger.debug('Ingesting keytab with format version %s', keytab_format_version)

    keytab_length = len(keytab)
    current_keytab_position = KEYTAB_HEADER_SIZE_BYTES
    entries = []
    # slots are counted including deleted ones, so that errors point at the right record
    slot = 0
    while current_keytab_position < keytab_length:
        record_start = current_keytab_position
        # entry length is the only signed number in the schema because it can be negative
        entry_length_bytes, current_keytab_position = _read_bytes_to_number_and_then_move_position(
            keytab, current_keytab_position, ENTRY_LENGTH_FIELD_SIZE_BYTES, keytab_format_version,
            limit=keytab_length, field='record length', slot=slot, is_signed_int=True)

        # a zero length marks the end of the usable data in the file. MIT tooling stops reading here too
        if entry_length_bytes == 0:
            logger.debug('Found a zero length record in slot %s, treating it as the end of the keytab', slot)
            break

        record_end = current_keytab_position + abs(entry_length_bytes)
        if record_end > keytab_length:
            raise KeytabFormatException('Keytab record declares a length of {} bytes, but only {} bytes remain in '
                                        'the keytab'.format(abs(entry_length_bytes),
                                                            keytab_length - current_keytab_position),
                                        offset=record_start, record_index=slot)

        if entry_length_bytes > 0:
            entries.append(_read_keytab_record(keytab, current_keytab_position, record_end, keytab_format_version,
                                               slot))
        else:
            # negative length records indicate deleted entries that were not erased from the file, so we skip them
            logger.debug('Skipping %s length keytab record in slot %s due to indication of a deleted entry',
                         abs(entry_length_bytes), slot)
        current_keytab_position = record_end
        slot += 1
    logger.debug('Extracted %s keytab entries from keytab', len(entries))
    return entries


def process_keytab_file_to_extract_entries(keytab_file_path: str, must_exist: bool = True) -> List[KeytabEntry]:
    """ Given a file path for a keytab, extract keytab entries from it and return them as KeytabEntry objects. """
    if not os.path.isfile(keytab_file_path):
        if not must_exist:
            return []
        raise KeytabFormatException('File {} cannot be found for reading keytabs.'
                                    .format(keytab_file_path))
    with open(keytab_file_path, 'rb') as keytab_file:
        keytab_data = keytab_file.read()
    return process_keytab_bytes_to_extract_entries(keytab_data)


def read_keytab_format_version(keytab: bytes) -> int:
    """ Read the 2 byte keytab header and return the keytab format version, raising an exception if the
    data isn't a kerberos v5 keytab in a format version we can read.
    """
    if len(keytab) < KEYTAB_HEADER_SIZE_BYTES:
        raise KeytabFormatException('Keytab data must be at least {} bytes long to hold the keytab header, but '
                                    'only {} bytes were provided'.format(KEYTAB_HEADER_SIZE_BYTES, len(keytab)),
                                    offset=0)
    start_byte = keytab[0]
    if start_byte != LEADING_BYTE_FOR_KERBEROS_V5:
        raise KeytabFormatException('Keytabs must always start with 0x05 as the leading byte, as only Kerberos v5 '
                                    'keytabs are supported. Seen leading byte: {}'.format(start_byte), offset=0)
    # the format version is a single byte, so there's no byte order to consider when reading it
    keytab_format_version = keytab[KEYTAB_STANDARD_LEADING_BYTES_SIZE]
    if keytab_format_version not in SUPPORTED_KEYTAB_FORMAT_VERSIONS:
        raise KeytabFormatException('Unrecognized and unsupported keytab format version: {}'
                                    .format(keytab_format_version), offset=KEYTAB_STANDARD_LEADING_BYTES_SIZE)
    return keytab_format_version


def _read_keytab_record(keytab: bytes, current_keytab_position: int, record_end: int, keytab_format_version: int,
                        slot: int) -> KeytabEntry:
    """ Read a single keytab entry out of the record that spans from the current position to record_end.
    Nothing in the entry is allowed to be read from beyond the end of the record.
    """
    def read_number(position: int, bytes_to_read: int, field: str, is_signed_int: bool = False) -> Tuple[int, int]:
        return _read_bytes_to_number_and_then_move_position(keytab, position, bytes_to_read, keytab_format_version,
                                                            limit=record_end, field=field, slot=slot,
                                                            is_signed_int=is_signed_int)

    def read_counted_bytes(position: int, size_of_length_field_bytes: int, field: str) -> Tuple[bytes, int]:
        length, position = read_number(position, size_of_length_field_bytes, field + ' length')
        return _read_bytes_and_then_move_position(keytab, position, length, limit=record_end, field=field, slot=slot)

    def read_counted_string(position: int, size_of_length_field_bytes: int, field: str) -> Tuple[str, int]:
        raw_value, new_position = read_counted_bytes(position, size_of_length_field_bytes, field)
        try:
            return raw_value.decode(KEYTAB_STRING_ENCODING), new_position
        except UnicodeDecodeError:
            raise KeytabFormatException('The {} in the keytab record is not valid {}'
                                        .format(field, KEYTAB_STRING_ENCODING), offset=position, record_index=slot)

    num_components, current_keytab_position = read_number(current_keytab_position, NUM_COMPONENTS_FIELD_SIZE_BYTES,
                                                          'principal component count')
    # the number of components encoded in a format v1 keytab is 1 greater than it is supposed to be
    if keytab_format_version == 1:
        num_components -= 1
    if num_components <= 0:
        raise KeytabFormatException('Malformed keytab record detected. A principal must have at least one '
                                    'component', offset=current_keytab_position, record_index=slot)

    # counted octet string realm (prefixed with 16bit length, no null terminator)
    realm_position = current_keytab_position
    realm, current_keytab_position = read_counted_string(current_keytab_position, REALM_LENGTH_FIELD_SIZE_BYTES,
                                                         'realm')
    if not realm:
        raise KeytabFormatException('Malformed keytab record detected. A realm length of 0 is encoded to a '
                                    'keytab.', offset=realm_position, record_index=slot)

    principal_components = []
    for _ in range(num_components):
        component_position = current_keytab_position
        component, current_keytab_position = read_counted_string(current_keytab_position,
                                                                 PRINCIPAL_COMPONENT_LENGTH_FIELD_SIZE_BYTES,
                                                                 'principal component')
        if not component:
            raise KeytabFormatException('Malformed keytab record detected. A principal component length of 0 is '
                                        'encoded to a keytab.', offset=component_position, record_index=slot)
        principal_components.append(component)

    # uint32_t name_type = 32 bits in name_type = 4 bytes to read
    # name type is not included in format version 1 keytabs
    if keytab_format_version != 1:
        name_type, current_keytab_position = read_number(current_keytab_position, PRINCIPAL_TYPE_FIELD_SIZE_BYTES,
                                                         'name type')
    else:
        name_type = FORMAT_VERSION_1_NAME_TYPE

    # int32_t timestamp (time key was established) = 32 bits in time = 4 bytes to read
    timestamp, current_keytab_position = read_number(current_keytab_position, TIMESTAMP_FIELD_SIZE_BYTES,
                                                     'timestamp', is_signed_int=True)

    # uint8_t vno8 = 8 bits in kvno = 1 byte to read
    vno8, current_keytab_position = read_number(current_keytab_position, VNO8_FIELD_SIZE_BYTES, 'key version')
    vno = vno8

    # keyblock structure: signed 16-bit value for encryption type and then counted_octet for key
    encryption_type, current_keytab_position = read_number(current_keytab_position, ENCRYPTION_TYPE_FIELD_SIZE,
                                                           'encryption type', is_signed_int=True)
    key, current_keytab_position = read_counted_bytes(current_keytab_position, KEY_LENGTH_FIELD_SIZE_BYTES, 'key')

    # uint32_t vno if >=4 bytes left in the record
    if record_end - current_keytab_position >= VNO32_FIELD_SIZE_BYTES:
        vno32, current_keytab_position = read_number(current_keytab_position, VNO32_FIELD_SIZE_BYTES, 'key version')
        # We will always pick the 32-bit vno's value if it is non-zero. Due to padding all entries in a
        # keytab file to be the same length, the 32-bit vno field can be 0 if it's not actually populated
        # at all (e.g. if it was generated on an older machine that didn't encode it).
        # https://web.mit.edu/kerberos/www/krb5-latest/doc/formats/keytab_file_format.html
        if vno32 != 0:
            vno = vno32

    # anything left in the record is flags or zero padding left behind when a tool overwrote an old entry
    # with a newer, smaller one. neither affects the entry, so the caller just moves on to record_end
    return KeytabEntry(principal_components, realm, key, vno, encryption_type_from_value(encryption_type), timestamp,
                       name_type=name_type)


def _read_bytes_and_then_move_position(keytab: bytes, current_keytab_position: int, bytes_to_read: int, limit: int,
                                       field: str, slot: int) -> Tuple[bytes, int]:
    """ Read some number of bytes from the keytab starting at the given position, move our position in the
    keytab forward, and return the bytes read and the new position.
    Reading past limit means the keytab is truncated or a length inside of it is wrong.
    """
    end_index = current_keytab_position + bytes_to_read
    if end_index > limit:
        raise KeytabFormatException('Unable to read the {} from the keytab. It needs {} bytes but only {} remain'
                                    .format(field, bytes_to_read, max(limit - current_keytab_position, 0)),
                                    offset=current_keytab_position, record_index=slot)
    return keytab[current_keytab_position:end_index], end_index


def _read_bytes_to_number_and_then_move_position(keytab: bytes, current_keytab_position: int, bytes_to_read: int,
                                                 keytab_format_version: int, limit: int, field: str, slot: int,
                                                 is_signed_int: bool = False) -> Tuple[int, int]:
    """ Read some number of bytes from the keytab starting at the given position, move our
    position in the keytab forward, and return the value read as an integer and the new position.

    Format version 1 means native byte order, which in practice was always little endian.
    Format version 2 means big-endian byte order.
    Format pulled from https://www.h5l.org/manual/HEAD/krb5/krb5_fileformats.html
    """
    raw_value, new_keytab_position = _read_bytes_and_then_move_position(keytab, current_keytab_position,
                                                                        bytes_to_read, limit, field, slot)
    byte_order = 'little' if keytab_format_version == 1 else 'big'
    return int.from_bytes(raw_value, byte_order, signed=is_signed_int), new_keytab_position
