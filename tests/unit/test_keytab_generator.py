"""
Unit tests for keytab_provider.environment.kerberos.kerberos_keytab_generator.
"""

import base64

import pytest

from keytab_provider import (
    KeytabEncodingOverflowException,
    KeytabEntry,
    KeytabFormatException,
    KerberosEncryptionType,
    write_keytab_entries_to_file,
    write_keytab_entries_to_raw_bytes,
    write_keytab_entries_to_raw_hex,
)
from keytab_provider.environment.kerberos.kerberos_keytab_generator import (
    write_keytab_entry_to_record_bytes,
    write_keytab_header_bytes,
)


def _entry(**overrides) -> KeytabEntry:
    values = dict(principal='principal', realm='realm.com', key=b'\x01' * 16, key_version=0,
                  encryption_type=KerberosEncryptionType.RC4_HMAC, timestamp=0)
    values.update(overrides)
    return KeytabEntry(**values)


class TestHeader:

    def test_empty_keytab_is_header_only(self):
        assert write_keytab_entries_to_raw_bytes([]) == b'\x05\x02'

    def test_header_for_format_version_1(self):
        assert write_keytab_header_bytes(1) == b'\x05\x01'

    def test_unsupported_format_version(self):
        with pytest.raises(KeytabFormatException):
            write_keytab_entries_to_raw_bytes([], keytab_format_version=3)


class TestEntryEncoding:

    def test_golden_rc4_keytab(self, golden_rc4_entry, golden_keytab_base64):
        data = write_keytab_entries_to_raw_bytes([golden_rc4_entry])
        assert base64.b64encode(data).decode('ascii') == golden_keytab_base64

    def test_hex_output(self, golden_rc4_entry, golden_keytab_base64):
        expected = base64.b64decode(golden_keytab_base64).hex()
        assert write_keytab_entries_to_raw_hex([golden_rc4_entry]) == expected

    def test_record_layout(self):
        entry = _entry(key=b'\xaa\xbb', key_version=3, timestamp=0x01020304,
                       encryption_type=KerberosEncryptionType.AES256_CTS_HMAC_SHA1_96)
        record = write_keytab_entry_to_record_bytes(entry)
        expected_body = (b'\x00\x01'
                         + b'\x00\x09realm.com'
                         + b'\x00\x09principal'
                         + b'\x00\x00\x00\x01'  # name type
                         + b'\x01\x02\x03\x04'  # timestamp
                         + b'\x03'  # 8 bit kvno
                         + b'\x00\x12'  # aes256-cts-hmac-sha1-96
                         + b'\x00\x02\xaa\xbb'
                         + b'\x00\x00\x00\x03')  # 32 bit kvno
        assert record == len(expected_body).to_bytes(4, 'big') + expected_body

    def test_entries_written_in_order(self, golden_rc4_entry, aes_entry, service_entry):
        entries = [service_entry, golden_rc4_entry, aes_entry]
        data = write_keytab_entries_to_raw_bytes(entries)
        expected = b'\x05\x02' + b''.join(write_keytab_entry_to_record_bytes(e) for e in entries)
        assert data == expected

    def test_multiple_principal_components(self, service_entry):
        record = write_keytab_entry_to_record_bytes(service_entry)
        # length prefix, then the component count
        assert record[4:6] == b'\x00\x02'
        assert b'\x00\x04HTTP\x00\x12server.example.com' in record

    def test_large_key_version_keeps_low_byte_in_legacy_field(self):
        record = write_keytab_entry_to_record_bytes(_entry(key_version=0x1234))
        assert record[-4:] == b'\x00\x00\x12\x34'
        # 8 bit kvno sits right after the 4 byte timestamp
        kvno8_index = 4 + 2 + 11 + 11 + 4 + 4
        assert record[kvno8_index] == 0x34

    def test_negative_timestamp(self):
        record = write_keytab_entry_to_record_bytes(_entry(timestamp=-1))
        timestamp_index = 4 + 2 + 11 + 11 + 4
        assert record[timestamp_index:timestamp_index + 4] == b'\xff\xff\xff\xff'

    def test_zero_length_key(self):
        record = write_keytab_entry_to_record_bytes(_entry(key=b''))
        assert record.endswith(b'\x00\x17\x00\x00\x00\x00\x00\x00')

    def test_unicode_lengths_are_byte_lengths(self):
        record = write_keytab_entry_to_record_bytes(_entry(realm='réalm'))
        assert b'\x00\x06' + 'réalm'.encode('utf-8') in record

    def test_format_version_1(self, golden_rc4_entry):
        data = write_keytab_entries_to_raw_bytes([golden_rc4_entry], keytab_format_version=1)
        key = golden_rc4_entry.key
        expected_body = (b'\x02\x00'  # one component, plus one because of the v1 bug
                         + b'\x09\x00realm.com'
                         + b'\x09\x00principal'
                         + b'\x00\x00\x00\x00'
                         + b'\x00'
                         + b'\x17\x00'
                         + b'\x10\x00' + key
                         + b'\x00\x00\x00\x00')
        assert data == b'\x05\x01' + len(expected_body).to_bytes(4, 'little') + expected_body


class TestOverflow:

    def test_realm_too_long(self, golden_rc4_entry):
        with pytest.raises(KeytabEncodingOverflowException) as exc_info:
            write_keytab_entries_to_raw_bytes([golden_rc4_entry, _entry(realm='r' * 65536)])
        assert exc_info.value.field == 'realm'
        assert exc_info.value.entry_index == 1

    def test_realm_at_limit(self):
        data = write_keytab_entries_to_raw_bytes([_entry(realm='r' * 65535)])
        assert b'\xff\xff' + b'r' * 65535 in data

    def test_principal_component_too_long(self):
        with pytest.raises(KeytabEncodingOverflowException) as exc_info:
            write_keytab_entries_to_raw_bytes([_entry(principal='p' * 65536)])
        assert exc_info.value.field == 'principal component'
        assert exc_info.value.entry_index == 0

    def test_multibyte_characters_count_as_bytes(self):
        with pytest.raises(KeytabEncodingOverflowException):
            write_keytab_entries_to_raw_bytes([_entry(realm='é' * 40000)])

    def test_key_too_long(self):
        with pytest.raises(KeytabEncodingOverflowException) as exc_info:
            write_keytab_entries_to_raw_bytes([_entry(key=b'\x00' * 65536)])
        assert exc_info.value.field == 'key'

    def test_too_many_components(self):
        with pytest.raises(KeytabEncodingOverflowException) as exc_info:
            write_keytab_entries_to_raw_bytes([_entry(principal=['a'] * 65536)])
        assert exc_info.value.field == 'principal component count'

    def test_timestamp_past_2038(self):
        with pytest.raises(KeytabEncodingOverflowException) as exc_info:
            write_keytab_entries_to_raw_bytes([_entry(timestamp=2 ** 31)])
        assert exc_info.value.field == 'timestamp'

    def test_key_version_too_large(self):
        with pytest.raises(KeytabEncodingOverflowException) as exc_info:
            write_keytab_entries_to_raw_bytes([_entry(key_version=2 ** 32)])
        assert exc_info.value.field == 'key version'

    @pytest.mark.parametrize('encryption_type', [2 ** 15, 70000, -2 ** 15 - 1])
    def test_unknown_encryption_type_out_of_range(self, encryption_type):
        with pytest.raises(KeytabEncodingOverflowException) as exc_info:
            write_keytab_entries_to_raw_bytes([_entry(encryption_type=encryption_type)])
        assert exc_info.value.field == 'encryption type'

    def test_negative_encryption_type(self):
        # legacy types like -128 (rc4-plain-old-exp) are stored as signed 16-bit numbers
        record = write_keytab_entry_to_record_bytes(_entry(key=b'', encryption_type=-128))
        assert record[-8:-6] == b'\xff\x80'

    def test_error_message_names_entry(self):
        with pytest.raises(KeytabEncodingOverflowException, match='Keytab entry 0'):
            write_keytab_entries_to_raw_bytes([_entry(timestamp=-2 ** 31 - 1)])


class TestFileOutput:

    def test_write_to_file(self, tmp_path, golden_rc4_entry, golden_keytab_base64):
        path = tmp_path / 'krb5.keytab'
        write_keytab_entries_to_file(str(path), [golden_rc4_entry])
        assert path.read_bytes() == base64.b64decode(golden_keytab_base64)

    def test_failed_encoding_leaves_file_untouched(self, tmp_path):
        path = tmp_path / 'krb5.keytab'
        path.write_bytes(b'existing')
        with pytest.raises(KeytabEncodingOverflowException):
            write_keytab_entries_to_file(str(path), [_entry(timestamp=2 ** 40)])
        assert path.read_bytes() == b'existing'
