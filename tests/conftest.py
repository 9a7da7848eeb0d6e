"""
Pytest configuration and shared fixtures for keytab_provider tests.
"""

import pytest

from keytab_provider import KerberosEncryptionType, KeytabEntry


# keytab for principal@realm.com, kvno 0, rc4-hmac, written at the epoch
GOLDEN_RC4_KEYTAB_BASE64 = 'BQIAAAA5AAEACXJlYWxtLmNvbQAJcHJpbmNpcGFsAAAAAQAAAAAAABcAEDHWz+DRaukxtzxZ1+DAicAAAAAA'
GOLDEN_RC4_KEY_HEX = '31d6cfe0d16ae931b73c59d7e0c089c0'


@pytest.fixture
def golden_keytab_base64() -> str:
    return GOLDEN_RC4_KEYTAB_BASE64


@pytest.fixture
def golden_rc4_entry() -> KeytabEntry:
    """The entry that the golden keytab holds."""
    return KeytabEntry(
        principal='principal',
        realm='realm.com',
        key=bytes.fromhex(GOLDEN_RC4_KEY_HEX),
        key_version=0,
        encryption_type=KerberosEncryptionType.RC4_HMAC,
        timestamp=0,
    )


@pytest.fixture
def aes_entry() -> KeytabEntry:
    return KeytabEntry(
        principal='principal two',
        realm='realm-two.com',
        key=bytes(range(16)),
        key_version=1,
        encryption_type='aes128-sha1',
        timestamp=1,
    )


@pytest.fixture
def service_entry() -> KeytabEntry:
    """A two component service principal."""
    return KeytabEntry(
        principal='HTTP/server.example.com',
        realm='EXAMPLE.COM',
        key=bytes(range(32)),
        key_version=7,
        encryption_type=KerberosEncryptionType.AES256_CTS_HMAC_SHA1_96,
        timestamp=1700000000,
    )
