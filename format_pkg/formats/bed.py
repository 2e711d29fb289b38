"""BED format descriptor."""

from types import MappingProxyType

from format_pkg.exceptions import ConfigurationError
from format_pkg.format import FormatDescriptor, FormatMetadata
from format_pkg.specialization import FormatSpecialization, ValueConversion
from format_pkg.utils.formats import MetadataSupport

BED_FIELDS = (
    'chrom', 'chromStart', 'chromEnd', 'name', 'score', 'strand',
    'thickStart', 'thickEnd', 'itemRgb', 'blockCount', 'blockSizes', 'blockStarts',
)
MIN_BED_COLUMNS = 3

BED_STRAND_MAPPING = MappingProxyType({1: '+', -1: '-', 0: '.'})


def build_bed(columns: int = len(BED_FIELDS)) -> FormatDescriptor:
    """
    Build a BED descriptor using the first ``columns`` BED columns.

    BED files carry 3 to 12 columns; a 6-column file is described with
    ``build_bed(6)``.

    Raises:
        ConfigurationError: If columns is outside 3-12
    """
    if isinstance(columns, bool) or not isinstance(columns, int) \
            or not MIN_BED_COLUMNS <= columns <= len(BED_FIELDS):
        raise ConfigurationError(
            f"BED files have {MIN_BED_COLUMNS} to {len(BED_FIELDS)} columns, got {columns!r}"
        )

    metadata = FormatMetadata(
        name='BED',
        extensions=['bed'],
        delimiter='\t',
        delimiter_regex=r'\t|\s+',
        empty_column='.',
        can_multitrack=True,
        can_metadata=MetadataSupport.OPTIONAL,
        metadata_info={
            'browser': 'Browser line: position and track visibility settings',
            'track': 'Track line: name, description, colour and display options',
        },
    )

    specialization = FormatSpecialization(
        name='bed',
        conversions={'strand': ValueConversion(BED_STRAND_MAPPING)},
    )

    descriptor = FormatDescriptor(
        metadata,
        field_info={
            'chrom': {'validator_type': 'string', 'accessor': 'seqname'},
            'chromStart': {'validator_type': 'integer', 'accessor': 'start'},
            'chromEnd': {'validator_type': 'integer', 'accessor': 'end'},
            'name': {'validator_type': 'string'},
            'score': {'validator_type': 'range', 'match': [0, 1000]},
            'strand': {'validator_type': 'strand_plusminus'},
            'thickStart': {'validator_type': 'integer', 'accessor': 'thick_start'},
            'thickEnd': {'validator_type': 'integer', 'accessor': 'thick_end'},
            'itemRgb': {'validator_type': 'colour', 'accessor': 'colour'},
            'blockCount': {'validator_type': 'integer', 'accessor': 'block_count'},
            'blockSizes': {'validator_type': 'comma_separated', 'accessor': 'block_sizes'},
            'blockStarts': {'validator_type': 'comma_separated', 'accessor': 'block_starts'},
        },
        specialization=specialization,
    )
    descriptor.set_field_order(BED_FIELDS[:columns])
    return descriptor
