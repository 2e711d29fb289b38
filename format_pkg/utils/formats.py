"""Format name and metadata-support enumerations."""

from enum import Enum, IntEnum
from pathlib import Path

__all__ = [
    'MetadataSupport',
    'FormatName',
]


class MetadataSupport(IntEnum):
    """Whether a format carries metadata (track lines, pragmas, headers)."""
    NEVER = 0
    MANDATORY = 1
    OPTIONAL = -1

    @classmethod
    def normalize(cls, value):
        """
        Convert various input formats to MetadataSupport enum.

        Accepts enum members, the integers 0/1/-1, booleans and the
        member names in any case ('optional', 'MANDATORY').

        Raises:
            ValueError: If the value cannot be mapped to a member
        """
        if isinstance(value, cls):
            return value

        if value is None or value is False:
            return cls.NEVER
        if value is True:
            return cls.MANDATORY

        if isinstance(value, str):
            name = value.strip().upper()
            if name in cls.__members__:
                return cls[name]
            try:
                value = int(name)
            except ValueError:
                raise ValueError(f"'{value}' is not a valid {cls.__name__}") from None

        return cls(value)


class FormatName(Enum):
    GFF3 = "gff3"
    GTF = "gtf"
    BED = "bed"

    def to_extension(self) -> str:
        return f'.{self.value}'

    @classmethod
    def _missing_(cls, value):
        """Handle flexible input formats for FormatName."""
        value_lower = str(value).lower().strip()

        # Remove leading dot
        if value_lower.startswith('.'):
            value_lower = value_lower[1:]

        # Extension mapping
        extension_map = {
            'gff': cls.GFF3,
            'gff3': cls.GFF3,
            'gtf': cls.GTF,
            'gff2': cls.GTF,
            'bed': cls.BED,
        }

        # Direct match
        if value_lower in extension_map:
            return extension_map[value_lower]

        # If it looks like a filename, extract extension
        if '.' in value_lower:
            ext = Path(value_lower).suffix[1:]
            if ext in extension_map:
                return extension_map[ext]

        raise ValueError(f"'{value}' is not a valid {cls.__name__}")
