""" An immutable, ordered collection of keytab entries that knows how to become keytab data and back. """
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

from typing import Iterable, Tuple

from Crypto.Hash import SHA256

from keytab_provider.core.keytab_entries import KeytabEntry
from keytab_provider.environment.kerberos.kerberos_constants import PREFERRED_KEYTAB_FORMAT_VERSION
from keytab_provider.environment.kerberos.kerberos_keytab_generator import write_keytab_entries_to_raw_bytes
from keytab_provider.environment.kerberos.kerberos_keytab_ingester import (
    process_keytab_bytes_to_extract_entries,
    read_keytab_format_version,
)
from keytab_provider.exceptions import InvalidKeytabEntryException


class Keytab:
    """ A keytab: the entries it holds, in order, and the format version it's written in.
    Entries are kept in the order given. The keytab format has no notion of sorting, and readers try
    entries in file order.
    """

    def __init__(self, entries: Iterable[KeytabEntry] = (),
                 format_version: int = PREFERRED_KEYTAB_FORMAT_VERSION):
        entries = tuple(entries)
        for index, entry in enumerate(entries):
            if not isinstance(entry, KeytabEntry):
                raise InvalidKeytabEntryException('Keytabs can only hold KeytabEntry objects, not {}'
                                                  .format(type(entry).__name__), entry_index=index)
        self._entries = entries
        self._format_version = format_version

    @property
    def entries(self) -> Tuple[KeytabEntry, ...]:
        return self._entries

    @property
    def format_version(self) -> int:
        return self._format_version

    @classmethod
    def from_bytes(cls, keytab_data: bytes) -> 'Keytab':
        """ Parse keytab data into a Keytab, keeping the format version the data was written in. """
        format_version = read_keytab_format_version(keytab_data)
        return cls(process_keytab_bytes_to_extract_entries(keytab_data), format_version=format_version)

    def to_bytes(self) -> bytes:
        return write_keytab_entries_to_raw_bytes(self._entries, keytab_format_version=self._format_version)

    def to_base64(self) -> str:
        return base64.b64encode(self.to_bytes()).decode('ascii')

    def get_content_id(self) -> str:
        """ The lowercase hex SHA256 digest of the keytab data. Identical keytabs always have identical ids. """
        return SHA256.new(self.to_bytes()).hexdigest()

    def __len__(self):
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def __eq__(self, other):
        if not isinstance(other, Keytab):
            return NotImplemented
        return self._entries == other._entries and self._format_version == other._format_version

    def __hash__(self):
        return hash((self._entries, self._format_version))

    def __repr__(self):
        return 'Keytab(format_version={}, entries={!r})'.format(self._format_version, list(self._entries))


def build_keytab(entries: Iterable[KeytabEntry],
                 format_version: int = PREFERRED_KEYTAB_FORMAT_VERSION) -> Keytab:
    """ Build a keytab out of the full list of entries that should be in it. """
    return Keytab(entries, format_version=format_version)
