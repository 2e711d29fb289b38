"""
Genomic Format Description Package
==================================

Schema-driven descriptions of line-oriented tabular genomic formats. Each
format declares its columns, a validation rule per column and format-level
metadata; records read from a file are wrapped in a view that exposes the
columns by name and converts stored values to the tokens the format expects.

Supported Formats
-----------------
- **GFF3** (.gff3, .gff)
- **GTF** (.gtf, .gff2)
- **BED** (.bed), 3 to 12 columns

Features
--------
- Declarative field tables with per-field validation types
- Validator types: boolean, string, integer, floating_point, range,
  comma_separated, case_insensitive, strand_integer, strand_plusminus,
  phase, rgb_string, colour, sequence, dna_sequence
- Custom validator types registered per format
- Format specializations: fixed column order and value conversions
  (e.g. strand 1/-1 written as +/- in GTF)
- Soft validation results collected per record and tabulated in reports

Quick Start
-----------

>>> from format_pkg import get_format, RecordView
>>> gtf = get_format('gtf')
>>> gtf.fields()
['seqname', 'source', 'type', 'start', 'end', 'score', 'strand', 'phase', 'attributes']
>>> record = RecordView.from_fields(gtf, ['chr1', 'havana', 'exon', '100', '200', '.', '-1', '.', 'gene_id "G1";'])
>>> record.strand
'-'
>>> record.validate()
[]

Defining a Format
-----------------

>>> from format_pkg import FormatDescriptor, FormatMetadata
>>> pairs = FormatDescriptor(
...     FormatMetadata(name='pairs', extensions=['pairs'], delimiter='\\t'),
...     field_info={'chrom': {'validator_type': 'string'},
...                 'pos': {'validator_type': 'integer', 'accessor': 'position'}},
...     field_order=['chrom', 'pos'],
... )
>>> pairs.validate_as('range', '5', [1, 10])
True

Error Handling
--------------
- FormatError: Base exception
    - ConfigurationError: Invalid field table, field order or validator
        - UnknownFormatError: Format name cannot be resolved
    - RecordValidationError: Raised by RecordView.check() only
    - UnknownFieldError: Record accessed with an unknown name

Invalid values are never raised: validators return False and records return
lists of ValidationIssue.
"""

__version__ = "0.1.0"
__license__ = "Apache-2.0"

# Public API exports
from format_pkg.exceptions import (
    FormatError,
    ConfigurationError,
    UnknownFormatError,
    UnknownFieldError,
    RecordValidationError,
)
from format_pkg.format import FieldInfo, FormatMetadata, FormatDescriptor, ValidationIssue
from format_pkg.specialization import (
    AttributeStyle,
    ValueConversion,
    FormatSpecialization,
    gtf_specialization,
)
from format_pkg.formats import build_bed, build_gff3, build_gtf
from format_pkg.registry import available_formats, get_format
from format_pkg.record import RecordView
from format_pkg.report import ValidationReport
from format_pkg.utils.formats import FormatName, MetadataSupport
from format_pkg.utils.validators import VALIDATORS
from format_pkg.logger import setup_logging, get_logger

__all__ = [
    # Descriptors
    'FieldInfo',
    'FormatMetadata',
    'FormatDescriptor',
    'ValidationIssue',
    'FormatName',
    'MetadataSupport',
    'VALIDATORS',

    # Specializations
    'AttributeStyle',
    'ValueConversion',
    'FormatSpecialization',
    'gtf_specialization',

    # Concrete formats
    'build_bed',
    'build_gff3',
    'build_gtf',
    'available_formats',
    'get_format',

    # Records
    'RecordView',
    'ValidationReport',

    # Errors
    'FormatError',
    'ConfigurationError',
    'UnknownFormatError',
    'UnknownFieldError',
    'RecordValidationError',

    # Logging
    'setup_logging',
    'get_logger',

    # Version info
    '__version__',
    '__license__',
]
