"""GFF3 format descriptor."""

from types import MappingProxyType

from format_pkg.format import FormatDescriptor, FormatMetadata
from format_pkg.specialization import AttributeStyle, FormatSpecialization, ValueConversion
from format_pkg.utils.formats import MetadataSupport

GFF3_FIELDS = ('seqid', 'source', 'type', 'start', 'end', 'score', 'strand', 'phase', 'attributes')

# 0 is an unstranded feature, written as '.'
GFF3_STRAND_MAPPING = MappingProxyType({1: '+', -1: '-', 0: '.'})


def build_gff3() -> FormatDescriptor:
    """Build the GFF3 descriptor."""
    metadata = FormatMetadata(
        name='GFF3',
        extensions=['gff3', 'gff'],
        delimiter='\t',
        empty_column='.',
        can_multitrack=False,
        can_metadata=MetadataSupport.OPTIONAL,
        metadata_info={
            'gff-version': 'Version of the GFF specification, must be 3',
            'sequence-region': 'Sequence ID, start and end of a landmark',
            'feature-ontology': 'URI of the feature ontology used',
            'attribute-ontology': 'URI of the attribute ontology used',
            'source-ontology': 'URI of the source ontology used',
            'species': 'NCBI taxonomy URI of the species',
            'genome-build': 'Source and build name of the genome assembly',
        },
    )

    specialization = FormatSpecialization(
        name='gff3',
        conversions={'strand': ValueConversion(GFF3_STRAND_MAPPING)},
        attribute_style=AttributeStyle.GFF3,
    )

    return FormatDescriptor(
        metadata,
        field_info={
            'seqid': {'validator_type': 'string', 'accessor': 'seqname'},
            'source': {'validator_type': 'string'},
            'type': {'validator_type': 'string'},
            'start': {'validator_type': 'integer'},
            'end': {'validator_type': 'integer'},
            'score': {'validator_type': 'floating_point', 'optional': True},
            'strand': {'validator_type': 'strand_plusminus'},
            'phase': {'validator_type': 'phase', 'optional': True},
            'attributes': {'validator_type': 'string'},
        },
        field_order=GFF3_FIELDS,
        specialization=specialization,
    )
