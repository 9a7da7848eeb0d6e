"""
Property-based tests for the keytab codec.

Uses Hypothesis to check that anything we can write, we can read back unchanged.
"""

from hypothesis import given, settings, strategies as st

from keytab_provider import (
    Keytab,
    KerberosEncryptionType,
    KeytabEntry,
    build_keytab,
    process_keytab_bytes_to_extract_entries,
    write_keytab_entries_to_raw_bytes,
)


# =============================================================================
# STRATEGIES
# =============================================================================

component_strategy = st.text(min_size=1, max_size=24)

entry_strategy = st.builds(
    KeytabEntry,
    principal=st.lists(component_strategy, min_size=1, max_size=4),
    realm=st.text(min_size=1, max_size=32),
    key=st.binary(max_size=48),
    key_version=st.integers(min_value=0, max_value=255),
    encryption_type=st.one_of(st.sampled_from(list(KerberosEncryptionType)),
                              st.integers(min_value=-2 ** 15, max_value=2 ** 15 - 1)),
    timestamp=st.integers(min_value=-2 ** 31, max_value=2 ** 31 - 1),
    name_type=st.integers(min_value=0, max_value=2 ** 32 - 1),
)

entry_list_strategy = st.lists(entry_strategy, max_size=8)


# =============================================================================
# CODEC PROPERTIES
# =============================================================================


class TestCodecProperties:

    @given(entries=entry_list_strategy)
    @settings(max_examples=100)
    def test_round_trip(self, entries):
        """Property: decoding an encoded keytab gives back the same entries, in the same order."""
        assert process_keytab_bytes_to_extract_entries(write_keytab_entries_to_raw_bytes(entries)) == entries

    @given(entries=entry_list_strategy)
    @settings(max_examples=50)
    def test_encoding_is_deterministic(self, entries):
        """Property: the same entries always produce the same bytes."""
        assert write_keytab_entries_to_raw_bytes(entries) == write_keytab_entries_to_raw_bytes(list(entries))

    @given(entries=st.lists(entry_strategy, min_size=2, max_size=6))
    @settings(max_examples=50)
    def test_order_preserved(self, entries):
        """Property: reversing the input reverses the output."""
        reversed_entries = list(reversed(entries))
        decoded = process_keytab_bytes_to_extract_entries(write_keytab_entries_to_raw_bytes(reversed_entries))
        assert decoded == reversed_entries

    @given(entries=entry_list_strategy)
    @settings(max_examples=50)
    def test_format_version_1_round_trip(self, entries):
        """Property: format version 1 keytabs round trip everything except the name type, which v1 lacks."""
        keytab = Keytab.from_bytes(build_keytab(entries, format_version=1).to_bytes())
        assert keytab.format_version == 1
        assert [(e.principal_components, e.realm, e.key, e.key_version, int(e.encryption_type), e.timestamp)
                for e in keytab] == \
            [(e.principal_components, e.realm, e.key, e.key_version, int(e.encryption_type), e.timestamp)
             for e in entries]

    @given(entries=entry_list_strategy)
    @settings(max_examples=50)
    def test_size_is_header_plus_records(self, entries):
        """Property: the keytab is exactly the header plus each record's length prefix and body."""
        data = write_keytab_entries_to_raw_bytes(entries)
        position = 2
        for _ in entries:
            position += 4 + int.from_bytes(data[position:position + 4], 'big', signed=True)
        assert position == len(data)
