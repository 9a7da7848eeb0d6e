""" Constants for use in keytab generation and ingestion """
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

from enum import IntEnum

# constants needed to ingest keytabs and also write them out to files
# See these pages for more info on the evolution of the format beyond code comments
# http://manpages.ubuntu.com/manpages/artful/man3/krb5_fileformats.3.html
# https://web.mit.edu/kerberos/www/krb5-latest/doc/formats/keytab_file_format.html
ENCRYPTION_TYPE_FIELD_SIZE = 2  # uint16_t encryption_type = 16 bits to represent enc type = 2 bytes
ENTRY_LENGTH_FIELD_SIZE_BYTES = 4  # int32_t size of entry = 32 bits in entry size = 4 bytes
KEYTAB_STANDARD_LEADING_BYTES_SIZE = 1  # 0x5, a single byte, prefixes all keytab files for Kerberos v5
KEYTAB_FORMAT_SIZE_BYTES = 1  # uint8_t = 8 bits = 1 byte
KEY_LENGTH_FIELD_SIZE_BYTES = 2  # uint16_t key_length = 16 bits = 2 bytes
NUM_COMPONENTS_FIELD_SIZE_BYTES = 2  # uint16_t num_components = 16 bits = 2 bytes
REALM_LENGTH_FIELD_SIZE_BYTES = 2  # uint16_t = 16 bits in realm length = 2 bytes
PRINCIPAL_COMPONENT_LENGTH_FIELD_SIZE_BYTES = 2  # uint16_t = 16 bits in each component length = 2 bytes
PRINCIPAL_TYPE_FIELD_SIZE_BYTES = 4  # uint32_t name_type = 32 bits in name_type = 4 bytes
TIMESTAMP_FIELD_SIZE_BYTES = 4  # int32_t timestamp (time key was written) = 32 bits = 4 bytes
VNO8_FIELD_SIZE_BYTES = 1  # uint8_t vno8 = 8 bits in kvno = 1 byte
VNO32_FIELD_SIZE_BYTES = 4  # uint32_t vno32 = 32 bits in kvno = 4 bytes

# the keytab format version is always written as a single byte, so byte order doesn't matter for it.
# versions 1 and 2 differ in byte order for everything that follows. version 1 is native byte order
# (we treat it as little endian, since that's what every machine that wrote them was), version 2 is
# network byte order
SUPPORTED_KEYTAB_FORMAT_VERSIONS = (1, 2)
# kerberos version 5 keytabs always start with 5
LEADING_BYTE_FOR_KERBEROS_V5 = 0x05
# format version 2 is newer and is preferred as it encodes more information and writes numbers in network byte order
PREFERRED_KEYTAB_FORMAT_VERSION = 2
# principal components are separated by forwarded slashes (not encoded)
PRINCIPAL_COMPONENT_DIVIDER = '/'
# strings in keytabs are counted octet strings. we read and write them as utf-8
KEYTAB_STRING_ENCODING = 'UTF-8'

NAME_TYPE_VALUE_TO_NAME_TYPE_MAP = {
    0: "KRB5_NT_UNKNOWN",
    1: "KRB5_NT_PRINCIPAL",
    2: "KRB5_NT_SRV_INST",
    3: "KRB5_NT_SRV_HST",
    5: "KRB5_NT_UID",
}
# name type written for every entry unless the caller says otherwise. this is what MIT and
# gokrb5 tooling write for a parsed principal name
DEFAULT_PRINCIPAL_NAME_TYPE = 1
# format version 1 keytabs have no name type field, so entries read from them get the default
FORMAT_VERSION_1_NAME_TYPE = DEFAULT_PRINCIPAL_NAME_TYPE


class KerberosEncryptionType(IntEnum):
    """ The encryption types we can write keys for. The value of each member is the number that
    represents it inside of a keytab entry.
    """
    DES3_CBC_SHA1_KD = 16  # RFC3961
    AES128_CTS_HMAC_SHA1_96 = 17  # RFC3962
    AES256_CTS_HMAC_SHA1_96 = 18  # RFC3962
    AES128_CTS_HMAC_SHA256_128 = 19  # RFC8009
    AES256_CTS_HMAC_SHA384_192 = 20  # RFC8009
    RC4_HMAC = 23  # RFC4757


# users will specify encryption types as strings. allow for the short forms of encryption types as
# well as the long ones, since MIT, Heimdal and AD tooling all disagree on what to call things.
# the first name listed for each encryption type is the canonical one
ENCRYPTION_TYPE_STR_TO_ENUM = {
    'des3-cbc-sha1-kd': KerberosEncryptionType.DES3_CBC_SHA1_KD,
    'aes128-cts-hmac-sha1-96': KerberosEncryptionType.AES128_CTS_HMAC_SHA1_96,
    'aes128-cts': KerberosEncryptionType.AES128_CTS_HMAC_SHA1_96,
    'aes128-sha1': KerberosEncryptionType.AES128_CTS_HMAC_SHA1_96,
    'aes256-cts-hmac-sha1-96': KerberosEncryptionType.AES256_CTS_HMAC_SHA1_96,
    'aes256-cts': KerberosEncryptionType.AES256_CTS_HMAC_SHA1_96,
    'aes256-sha1': KerberosEncryptionType.AES256_CTS_HMAC_SHA1_96,
    'aes128-cts-hmac-sha256-128': KerberosEncryptionType.AES128_CTS_HMAC_SHA256_128,
    'aes128-sha2': KerberosEncryptionType.AES128_CTS_HMAC_SHA256_128,
    'aes256-cts-hmac-sha384-192': KerberosEncryptionType.AES256_CTS_HMAC_SHA384_192,
    'aes256-sha2': KerberosEncryptionType.AES256_CTS_HMAC_SHA384_192,
    'arcfour-hmac': KerberosEncryptionType.RC4_HMAC,
    'rc4-hmac': KerberosEncryptionType.RC4_HMAC,
    'arcfour-hmac-md5': KerberosEncryptionType.RC4_HMAC,
}

# the reverse of the above, keeping only the first (canonical) name for each encryption type
ENCRYPTION_TYPE_ENUM_TO_CANONICAL_STR = {value: key for key, value
                                         in reversed(list(ENCRYPTION_TYPE_STR_TO_ENUM.items()))}

# key sizes in bytes for each encryption type. des3 keys are 3 des keys with parity bits, so 24 bytes
ENCRYPTION_TYPE_KEY_SIZE_BYTES = {
    KerberosEncryptionType.DES3_CBC_SHA1_KD: 24,
    KerberosEncryptionType.AES128_CTS_HMAC_SHA1_96: 16,
    KerberosEncryptionType.AES256_CTS_HMAC_SHA1_96: 32,
    KerberosEncryptionType.AES128_CTS_HMAC_SHA256_128: 16,
    KerberosEncryptionType.AES256_CTS_HMAC_SHA384_192: 32,
    KerberosEncryptionType.RC4_HMAC: 16,
}
