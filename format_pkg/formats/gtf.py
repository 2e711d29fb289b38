"""GTF (GFF2) format descriptor."""

from format_pkg.format import FormatDescriptor, FormatMetadata
from format_pkg.specialization import GTF_FIELDS, gtf_specialization
from format_pkg.utils.formats import MetadataSupport


def build_gtf() -> FormatDescriptor:
    """
    Build the GTF descriptor.

    The column order comes from the GTF specialization, which also maps the
    internal strand codes 1/-1 to '+'/'-' when a record is read.
    """
    metadata = FormatMetadata(
        name='GTF',
        extensions=['gtf', 'gff2'],
        delimiter='\t',
        empty_column='.',
        can_multitrack=False,
        can_metadata=MetadataSupport.OPTIONAL,
        metadata_info={
            'genome-build': 'Name of the genome assembly',
            'genome-version': 'Version of the genome assembly',
            'genome-date': 'Release date of the assembly',
            'genome-build-accession': 'Accession of the genome assembly',
            'genebuild-last-updated': 'Date of the last gene set update',
        },
    )

    return FormatDescriptor(
        metadata,
        field_info={
            'seqname': {'validator_type': 'string'},
            'source': {'validator_type': 'string'},
            'type': {'validator_type': 'string'},
            'start': {'validator_type': 'integer'},
            'end': {'validator_type': 'integer'},
            'score': {'validator_type': 'floating_point', 'optional': True},
            'strand': {'validator_type': 'strand_plusminus'},
            'phase': {'validator_type': 'phase', 'optional': True},
            'attributes': {'validator_type': 'string'},
        },
        field_order=GTF_FIELDS,
        specialization=gtf_specialization(),
    )
