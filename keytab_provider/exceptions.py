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


class KeytabProviderException(Exception):
    """ A parent class for all other exceptions so that users can have a catch-all exception for
    functional issues that still doesn't blind them to things like accidentally providing a string
    where a number is needed.
    """
    def __init__(self, exception_str):
        self.message = exception_str
        super().__init__(self.message)


class InvalidKeytabEntryException(KeytabProviderException):
    """ An exception raised when the configuration for a keytab entry is invalid, such as a key version
    outside of 0-255, a malformed timestamp, or a key whose length doesn't match its encryption type.
    """
    def __init__(self, exception_str, entry_index: int = None):
        self.entry_index = entry_index
        if entry_index is not None:
            exception_str = 'Keytab entry {}: {}'.format(entry_index, exception_str)
        super().__init__(exception_str)


class KeytabEncodingOverflowException(KeytabProviderException):
    """ An exception raised when a value in a keytab entry is too large to fit in the fixed size field
    that the keytab format allocates for it.
    """
    def __init__(self, exception_str, field: str = None, entry_index: int = None):
        self.field = field
        self.entry_index = entry_index
        if entry_index is not None:
            exception_str = 'Keytab entry {}: {}'.format(entry_index, exception_str)
        super().__init__(exception_str)


class KeytabFormatException(KeytabProviderException):
    """ An exception raised when keytab data is read in but the encoding is invalid, truncated, or
    uses a format version we don't support.
    """
    def __init__(self, exception_str, offset: int = None, record_index: int = None):
        self.offset = offset
        self.record_index = record_index
        location = []
        if record_index is not None:
            location.append('record {}'.format(record_index))
        if offset is not None:
            location.append('offset {}'.format(offset))
        if location:
            exception_str = '{} ({})'.format(exception_str, ', '.join(location))
        super().__init__(exception_str)


class UnsupportedEncryptionTypeException(KeytabProviderException):
    """ An exception raised when an encryption type name doesn't map to any encryption type we can
    write keys for.
    """
    def __init__(self, exception_str):
        super().__init__(exception_str)
