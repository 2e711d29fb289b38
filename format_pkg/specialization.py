"""
Format specializations.

A :class:`FormatSpecialization` is an optional capability attached to a
:class:`~format_pkg.format.FormatDescriptor` when a concrete format's on-wire
representation diverges from the generic schema. It can:

- fix the column order (``field_order``), overriding the descriptor's field order
- convert stored values to the format's external tokens (``conversions``),
  e.g. the internal strand code ``1`` to GTF's ``+``
- contribute extra validator types (``validators``)
- choose how a structured attributes column is rendered (``attribute_style``)

Specializations are immutable and are built once, when the format is
registered.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional, Tuple

__all__ = [
    'AttributeStyle',
    'ValueConversion',
    'FormatSpecialization',
    'GTF_FIELDS',
    'GTF_STRAND_MAPPING',
    'gtf_specialization',
]


class AttributeStyle(Enum):
    """Rendering of a key/value attributes column."""
    GFF3 = "gff3"
    GTF = "gtf"

    def render(self, attributes: Mapping[str, Any]) -> str:
        """
        Render a mapping of attributes as a single column value.

        List values are joined with commas in GFF3 and repeated as separate
        key/value pairs in GTF.
        """
        parts = []
        for key, value in attributes.items():
            values = value if isinstance(value, (list, tuple)) else [value]
            if self is AttributeStyle.GFF3:
                parts.append(f"{key}={','.join(str(v) for v in values)}")
            else:
                parts.extend(f'{key} "{v}";' for v in values)
        separator = ';' if self is AttributeStyle.GFF3 else ' '
        return separator.join(parts)


def _lookup_key(value):
    """Integer-like strings are looked up by their integer value."""
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return value
    return value


class ValueConversion:
    """
    Fixed bidirectional mapping between internal values and external tokens.

    Lookups outside the mapped domain return the value unchanged, which makes
    both directions idempotent::

        >>> strand = ValueConversion({1: '+', -1: '-'})
        >>> strand.to_external(1)
        '+'
        >>> strand.to_external('+')
        '+'
        >>> strand.to_internal('-')
        -1
    """

    def __init__(self, mapping: Mapping[Any, Any]):
        self._forward = MappingProxyType(dict(mapping))
        self._reverse = MappingProxyType({v: k for k, v in mapping.items()})

    @property
    def mapping(self) -> Mapping[Any, Any]:
        """Read-only view of the internal -> external table."""
        return self._forward

    def to_external(self, value):
        try:
            return self._forward.get(_lookup_key(value), value)
        except TypeError:
            # unhashable values are never mapped
            return value

    def to_internal(self, value):
        try:
            return self._reverse.get(value, value)
        except TypeError:
            return value

    def __eq__(self, other):
        if not isinstance(other, ValueConversion):
            return NotImplemented
        return dict(self._forward) == dict(other._forward)

    def __hash__(self):
        return hash(frozenset(self._forward.items()))

    def __repr__(self):
        return f"{self.__class__.__name__}({dict(self._forward)!r})"


@dataclass(frozen=True)
class FormatSpecialization:
    """Overrides applied on top of a generic format descriptor."""
    name: str = ""
    field_order: Optional[Tuple[str, ...]] = None
    conversions: Mapping[str, ValueConversion] = field(default_factory=dict)
    validators: Mapping[str, Callable] = field(default_factory=dict)
    attribute_style: Optional[AttributeStyle] = None

    def __post_init__(self):
        if self.field_order is not None:
            object.__setattr__(self, 'field_order', tuple(self.field_order))
        object.__setattr__(self, 'conversions', MappingProxyType(dict(self.conversions)))
        object.__setattr__(self, 'validators', MappingProxyType(dict(self.validators)))

    def fields(self) -> Optional[Tuple[str, ...]]:
        """The fixed column order, or None when the generic order applies."""
        return self.field_order

    def get_conversion(self, field_name: str) -> Optional[ValueConversion]:
        return self.conversions.get(field_name)

    def strand_conversion(self) -> Mapping[Any, Any]:
        """Read-only strand mapping table, empty if the strand is not converted."""
        conversion = self.get_conversion('strand')
        if conversion is None:
            return MappingProxyType({})
        return conversion.mapping


GTF_FIELDS = ('seqname', 'source', 'type', 'start', 'end', 'score', 'strand', 'phase', 'attributes')
GTF_STRAND_MAPPING: Mapping[int, str] = MappingProxyType({1: '+', -1: '-'})


def gtf_specialization() -> FormatSpecialization:
    """GTF/GFF2: nine fixed columns and +/- strand tokens."""
    return FormatSpecialization(
        name='gtf',
        field_order=GTF_FIELDS,
        conversions={'strand': ValueConversion(GTF_STRAND_MAPPING)},
        attribute_style=AttributeStyle.GTF,
    )
