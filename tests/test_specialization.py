"""
Tests for format specializations and the GTF override.

Tests cover:
- Bidirectional value conversion with identity fallback
- GTF fixed field order overriding the descriptor's order
- GTF strand conversion exposed read-only
- Attribute rendering styles
"""

import pytest

from format_pkg.format import FormatDescriptor
from format_pkg.formats import build_gtf
from format_pkg.specialization import (
    GTF_FIELDS,
    AttributeStyle,
    FormatSpecialization,
    ValueConversion,
    gtf_specialization,
)

EXPECTED_GTF_FIELDS = ['seqname', 'source', 'type', 'start', 'end', 'score', 'strand', 'phase', 'attributes']


class TestValueConversion:
    """Test the bidirectional conversion table."""

    @pytest.fixture
    def strand(self):
        return ValueConversion({1: '+', -1: '-'})

    def test_to_external(self, strand):
        """Test mapping internal codes to external tokens."""
        assert strand.to_external(1) == '+'
        assert strand.to_external(-1) == '-'

    def test_to_external_integer_strings(self, strand):
        """Test that integer-like strings read from files are mapped too."""
        assert strand.to_external('1') == '+'
        assert strand.to_external('-1') == '-'

    def test_to_external_fallback(self, strand):
        """Test that values outside the table pass through unchanged."""
        assert strand.to_external('+') == '+'
        assert strand.to_external(0) == 0
        assert strand.to_external('.') == '.'
        assert strand.to_external(None) is None
        assert strand.to_external(['1']) == ['1']

    def test_to_external_idempotent(self, strand):
        """Test that applying the read transform twice equals applying it once."""
        for value in (1, -1, '1', '+', '-', '.', 0, 'x'):
            once = strand.to_external(value)
            assert strand.to_external(once) == once

    def test_to_internal(self, strand):
        """Test mapping external tokens back to internal codes."""
        assert strand.to_internal('+') == 1
        assert strand.to_internal('-') == -1
        assert strand.to_internal('?') == '?'
        assert strand.to_internal(1) == 1

    def test_mapping_is_read_only(self, strand):
        """Test that the exposed table cannot be modified."""
        with pytest.raises(TypeError):
            strand.mapping[0] = '.'

    def test_source_mapping_copied(self):
        """Test that later changes to the source dict do not leak in."""
        source = {1: '+'}
        conversion = ValueConversion(source)
        source[-1] = '-'

        assert conversion.to_external(-1) == -1

    def test_equality(self):
        """Test that conversions compare by their table."""
        assert ValueConversion({1: '+'}) == ValueConversion({1: '+'})
        assert ValueConversion({1: '+'}) != ValueConversion({1: '-'})


class TestGtfSpecialization:
    """Test the GTF override of fields and strand representation."""

    def test_fields(self):
        """Test the fixed nine GTF columns."""
        assert list(gtf_specialization().fields()) == EXPECTED_GTF_FIELDS
        assert list(GTF_FIELDS) == EXPECTED_GTF_FIELDS

    def test_strand_conversion(self):
        """Test the exposed strand table."""
        mapping = gtf_specialization().strand_conversion()

        assert mapping[1] == '+'
        assert mapping[-1] == '-'
        assert dict(mapping) == {1: '+', -1: '-'}

    def test_strand_conversion_read_only(self):
        """Test that the strand table cannot be modified."""
        with pytest.raises(TypeError):
            gtf_specialization().strand_conversion()[0] = '.'

    def test_specialization_immutable(self):
        """Test that a specialization cannot be changed after construction."""
        specialization = gtf_specialization()
        with pytest.raises(AttributeError):
            specialization.field_order = ('a',)

    def test_fields_override_descriptor_order(self):
        """Test that the GTF order wins over any configured order."""
        descriptor = FormatDescriptor(
            field_info={'a': {'validator_type': 'string'}},
            field_order=['a', 'b'],
            specialization=gtf_specialization(),
        )

        assert descriptor.fields() == EXPECTED_GTF_FIELDS
        assert descriptor.get_field_order() == ['a', 'b']

    def test_fields_override_after_reorder(self):
        """Test that reordering the GTF descriptor does not change its columns."""
        descriptor = build_gtf()
        descriptor.set_field_order(['seqname', 'start'])

        assert descriptor.fields() == EXPECTED_GTF_FIELDS

    def test_descriptor_strand_conversion(self):
        """Test that the descriptor exposes the specialization's strand table."""
        descriptor = build_gtf()

        assert dict(descriptor.strand_conversion()) == {1: '+', -1: '-'}
        assert descriptor.get_conversion('strand').to_external(1) == '+'
        assert descriptor.get_conversion('start') is None


class TestGenericDescriptor:
    """Test a descriptor without a specialization."""

    def test_fields_fall_back_to_order(self):
        """Test that the generic order is used without a specialization."""
        descriptor = FormatDescriptor(field_info={'a': {}}, field_order=['a', 'b'])

        assert descriptor.fields() == ['a', 'b']

    def test_no_conversion(self):
        """Test that the generic descriptor stores strand values as-is."""
        descriptor = FormatDescriptor(field_info={'strand': {}}, field_order=['strand'])

        assert descriptor.get_conversion('strand') is None
        assert dict(descriptor.strand_conversion()) == {}

    def test_specialization_without_fields(self):
        """Test a specialization that only converts values."""
        specialization = FormatSpecialization(conversions={'strand': ValueConversion({1: '+'})})
        descriptor = FormatDescriptor(field_info={'strand': {}}, field_order=['strand'],
                                      specialization=specialization)

        assert descriptor.fields() == ['strand']
        assert descriptor.strand_conversion()[1] == '+'


class TestAttributeStyle:
    """Test rendering of attribute mappings."""

    def test_gff3(self):
        """Test key=value pairs separated by semicolons."""
        rendered = AttributeStyle.GFF3.render({'ID': 'gene1', 'Parent': ['tx1', 'tx2']})
        assert rendered == 'ID=gene1;Parent=tx1,tx2'

    def test_gtf(self):
        """Test quoted values terminated by semicolons."""
        rendered = AttributeStyle.GTF.render({'gene_id': 'G1', 'tag': ['basic', 'CCDS']})
        assert rendered == 'gene_id "G1"; tag "basic"; tag "CCDS";'
