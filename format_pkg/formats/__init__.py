"""Concrete format descriptors."""

from format_pkg.formats.bed import BED_FIELDS, build_bed
from format_pkg.formats.gff3 import GFF3_FIELDS, build_gff3
from format_pkg.formats.gtf import build_gtf

__all__ = [
    'BED_FIELDS',
    'GFF3_FIELDS',
    'build_bed',
    'build_gff3',
    'build_gtf',
]
