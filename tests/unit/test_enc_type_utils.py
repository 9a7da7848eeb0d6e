"""
Unit tests for keytab_provider.environment.kerberos.kerberos_enc_type_utils.
"""

import pytest

from keytab_provider import (
    KerberosEncryptionType,
    UnsupportedEncryptionTypeException,
    get_canonical_encryption_type_name,
    get_expected_key_length,
    normalize_encryption_type,
)
from keytab_provider.environment.kerberos.kerberos_enc_type_utils import encryption_type_from_value


class TestEncryptionTypes:

    @pytest.mark.parametrize('alias,expected', [
        ('aes128-cts-hmac-sha1-96', KerberosEncryptionType.AES128_CTS_HMAC_SHA1_96),
        ('aes128-cts', KerberosEncryptionType.AES128_CTS_HMAC_SHA1_96),
        ('aes128-sha1', KerberosEncryptionType.AES128_CTS_HMAC_SHA1_96),
        ('aes256-cts-hmac-sha1-96', KerberosEncryptionType.AES256_CTS_HMAC_SHA1_96),
        ('aes256-cts', KerberosEncryptionType.AES256_CTS_HMAC_SHA1_96),
        ('aes256-sha1', KerberosEncryptionType.AES256_CTS_HMAC_SHA1_96),
        ('aes128-cts-hmac-sha256-128', KerberosEncryptionType.AES128_CTS_HMAC_SHA256_128),
        ('aes128-sha2', KerberosEncryptionType.AES128_CTS_HMAC_SHA256_128),
        ('aes256-cts-hmac-sha384-192', KerberosEncryptionType.AES256_CTS_HMAC_SHA384_192),
        ('aes256-sha2', KerberosEncryptionType.AES256_CTS_HMAC_SHA384_192),
        ('des3-cbc-sha1-kd', KerberosEncryptionType.DES3_CBC_SHA1_KD),
        ('arcfour-hmac', KerberosEncryptionType.RC4_HMAC),
        ('rc4-hmac', KerberosEncryptionType.RC4_HMAC),
        ('arcfour-hmac-md5', KerberosEncryptionType.RC4_HMAC),
        ('RC4-HMAC', KerberosEncryptionType.RC4_HMAC),
    ])
    def test_aliases(self, alias, expected):
        assert normalize_encryption_type(alias) is expected

    def test_wire_values(self):
        assert int(KerberosEncryptionType.RC4_HMAC) == 23
        assert int(KerberosEncryptionType.AES256_CTS_HMAC_SHA384_192) == 20
        assert int(KerberosEncryptionType.DES3_CBC_SHA1_KD) == 16

    def test_enum_passes_through(self):
        assert normalize_encryption_type(KerberosEncryptionType.RC4_HMAC) is KerberosEncryptionType.RC4_HMAC

    @pytest.mark.parametrize('value', ['des-cbc-md5', 'camellia256-cts-cmac', '', None, 23])
    def test_unsupported(self, value):
        with pytest.raises(UnsupportedEncryptionTypeException):
            normalize_encryption_type(value)

    def test_canonical_names(self):
        assert get_canonical_encryption_type_name('rc4-hmac') == 'arcfour-hmac'
        assert get_canonical_encryption_type_name('aes256-sha2') == 'aes256-cts-hmac-sha384-192'
        assert get_canonical_encryption_type_name(KerberosEncryptionType.AES128_CTS_HMAC_SHA1_96) == \
            'aes128-cts-hmac-sha1-96'

    def test_key_lengths(self):
        assert get_expected_key_length('rc4-hmac') == 16
        assert get_expected_key_length('aes128-sha1') == 16
        assert get_expected_key_length('aes256-sha1') == 32
        assert get_expected_key_length('aes128-sha2') == 16
        assert get_expected_key_length('aes256-sha2') == 32
        assert get_expected_key_length('des3-cbc-sha1-kd') == 24

    def test_every_type_has_a_name_and_key_length(self):
        for enc_type in KerberosEncryptionType:
            assert get_canonical_encryption_type_name(enc_type)
            assert get_expected_key_length(enc_type) > 0

    def test_from_value(self):
        assert encryption_type_from_value(18) is KerberosEncryptionType.AES256_CTS_HMAC_SHA1_96
        assert encryption_type_from_value(3) == 3
