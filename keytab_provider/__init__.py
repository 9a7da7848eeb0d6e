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

from keytab_provider.core.keytab import (
    Keytab,
    build_keytab,
)

from keytab_provider.core.keytab_entries import (
    KeytabEntry,
)

from keytab_provider.core.keytab_file_resource import (
    KeytabFileState,
    create_keytab_file,
    format_rfc3339_timestamp,
    parse_rfc3339_timestamp,
    read_keytab_file_content,
)

from keytab_provider.environment.kerberos.kerberos_constants import (
    KerberosEncryptionType,
)
from keytab_provider.environment.kerberos.kerberos_enc_type_utils import (
    get_canonical_encryption_type_name,
    get_expected_key_length,
    normalize_encryption_type,
)
from keytab_provider.environment.kerberos.kerberos_keytab_generator import (
    write_keytab_entries_to_file,
    write_keytab_entries_to_raw_bytes,
    write_keytab_entries_to_raw_hex,
)
from keytab_provider.environment.kerberos.kerberos_keytab_ingester import (
    process_keytab_bytes_to_extract_entries,
    process_keytab_file_to_extract_entries,
)

from keytab_provider.exceptions import *
from keytab_provider.logging_utils import configure_log_level, get_logger
