""" The computation behind a keytab_file resource: entry configuration in, keytab content and id out. """
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

import base64
import binascii
import re

from datetime import datetime
from typing import Any, Dict, Iterable, List, Mapping

import pytz

from keytab_provider import logging_utils

from keytab_provider.core.keytab import build_keytab
from keytab_provider.core.keytab_entries import KeytabEntry
from keytab_provider.environment.kerberos.kerberos_constants import VNO8_FIELD_SIZE_BYTES
from keytab_provider.environment.kerberos.kerberos_enc_type_utils import (
    get_expected_key_length,
    normalize_encryption_type,
)
from keytab_provider.environment.kerberos.kerberos_keytab_ingester import process_keytab_bytes_to_extract_entries
from keytab_provider.exceptions import (
    InvalidKeytabEntryException,
    KeytabFormatException,
    KeytabProviderException,
)

logger = logging_utils.get_logger()

REQUIRED_ENTRY_ATTRIBUTES = ('principal', 'realm', 'key', 'key_version', 'encryption_type')
MAX_KEY_VERSION = 2 ** (8 * VNO8_FIELD_SIZE_BYTES) - 1

# RFC3339 section 5.6 date-time. fractional seconds are accepted but dropped, since keytabs only
# store whole seconds
_RFC3339_PATTERN = re.compile(r'^(\d{4}-\d{2}-\d{2})[Tt](\d{2}:\d{2}:\d{2})(\.\d+)?'
                              r'([Zz]|[+-](?:[01]\d|2[0-3]):[0-5]\d)$')
_RFC3339_OUTPUT_FORMAT = '%Y-%m-%dT%H:%M:%SZ'


class KeytabFileState:
    """ The computed state of a keytab_file resource.
    :param entries: The entry configurations, with any timestamps that weren't configured filled in.
    :param content_base64: The keytab data, base64 encoded.
    :param id: The SHA256 hex digest of the keytab data.
    """
    def __init__(self, entries: List[Dict[str, Any]], content_base64: str, id: str):
        self.entries = entries
        self.content_base64 = content_base64
        self.id = id

    def get_content_bytes(self) -> bytes:
        return base64.b64decode(self.content_base64)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'entry': [dict(entry) for entry in self.entries],
            'content_base64': self.content_base64,
            'id': self.id,
        }

    def __repr__(self):
        # content is sensitive, so it's left out
        return 'KeytabFileState(id={!r}, entries={})'.format(self.id, len(self.entries))


def parse_rfc3339_timestamp(timestamp: str) -> datetime:
    """ Parse an RFC3339 timestamp such as 1970-01-01T00:00:00Z or 2023-04-05T06:07:08+02:00 into a UTC
    datetime.
    """
    match = _RFC3339_PATTERN.match(timestamp) if isinstance(timestamp, str) else None
    if match is None:
        raise ValueError('{!r} is not an RFC3339 timestamp'.format(timestamp))
    date_part, time_part, _, offset_part = match.groups()
    naive_time = datetime.strptime(date_part + 'T' + time_part, '%Y-%m-%dT%H:%M:%S')
    if offset_part in ('Z', 'z'):
        return pytz.utc.localize(naive_time)
    sign = -1 if offset_part[0] == '-' else 1
    hours, minutes = offset_part[1:].split(':')
    offset_minutes = sign * (int(hours) * 60 + int(minutes))
    return pytz.FixedOffset(offset_minutes).localize(naive_time).astimezone(pytz.utc)


def format_rfc3339_timestamp(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = pytz.utc.localize(moment)
    return moment.astimezone(pytz.utc).strftime(_RFC3339_OUTPUT_FORMAT)


def create_keytab_file(entry_configs: Iterable[Mapping[str, Any]], now: datetime = None) -> KeytabFileState:
    """ Build the keytab described by a keytab_file resource's entries, and compute the resource's
    content_base64 and id.
    :param entry_configs: The entry blocks of the resource. Each has a principal, realm, key (the raw key
                          hex encoded), key_version (0-255), encryption_type (e.g. aes256-sha1 or rc4-hmac),
                          and optionally an RFC3339 timestamp.
    :param now: The time to use for entries with no timestamp. Defaults to the current time. All entries
                missing a timestamp get the same one.
    """
    if now is None:
        now = datetime.now(pytz.utc)
    now = now.replace(microsecond=0)

    resolved_configs = []
    entries = []
    for index, entry_config in enumerate(entry_configs):
        resolved_config = dict(entry_config)
        if resolved_config.get('timestamp') is None:
            resolved_config['timestamp'] = format_rfc3339_timestamp(now)
        entries.append(_build_entry_from_config(resolved_config, index))
        resolved_configs.append(resolved_config)

    keytab = build_keytab(entries)
    content_id = keytab.get_content_id()
    logger.info('Generated keytab %s with %s entries', content_id, len(keytab))
    return KeytabFileState(resolved_configs, keytab.to_base64(), content_id)


def read_keytab_file_content(content_base64: str) -> List[KeytabEntry]:
    """ Decode the content_base64 of a keytab_file resource back into its entries. """
    try:
        keytab_data = base64.b64decode(content_base64, validate=True)
    except (binascii.Error, TypeError, ValueError) as ex:
        raise KeytabFormatException('Keytab content is not valid base64: {}'.format(ex))
    return process_keytab_bytes_to_extract_entries(keytab_data)


def _build_entry_from_config(entry_config: Mapping[str, Any], index: int) -> KeytabEntry:
    missing = [attribute for attribute in REQUIRED_ENTRY_ATTRIBUTES if entry_config.get(attribute) is None]
    if missing:
        raise InvalidKeytabEntryException('Missing required attributes: {}'.format(', '.join(missing)),
                                          entry_index=index)

    key_version = entry_config['key_version']
    if isinstance(key_version, bool) or not isinstance(key_version, int) or not 0 <= key_version <= MAX_KEY_VERSION:
        raise InvalidKeytabEntryException('key_version must be an integer between 0 and {}. Got {!r}'
                                          .format(MAX_KEY_VERSION, key_version), entry_index=index)

    try:
        timestamp = parse_rfc3339_timestamp(entry_config['timestamp'])
    except ValueError as ex:
        raise InvalidKeytabEntryException('Invalid timestamp: {}'.format(ex), entry_index=index)

    try:
        encryption_type = normalize_encryption_type(entry_config['encryption_type'])
    except KeytabProviderException as ex:
        raise InvalidKeytabEntryException(ex.message, entry_index=index)

    try:
        key = bytes.fromhex(entry_config['key'])
    except (TypeError, ValueError):
        raise InvalidKeytabEntryException('key must be the raw key encoded as hex', entry_index=index)
    expected_length = get_expected_key_length(encryption_type)
    if len(key) != expected_length:
        raise InvalidKeytabEntryException('{} keys must be {} bytes long, but the key provided is {} bytes'
                                          .format(entry_config['encryption_type'], expected_length, len(key)),
                                          entry_index=index)

    try:
        return KeytabEntry(entry_config['principal'], entry_config['realm'], key, key_version, encryption_type,
                           timestamp)
    except InvalidKeytabEntryException as ex:
        raise InvalidKeytabEntryException(ex.message, entry_index=index)
