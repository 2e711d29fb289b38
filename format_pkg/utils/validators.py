"""
Value validators for tabular genomic formats.

Every validator takes a raw field value (normally a string read from a file)
and an optional ``match`` parameter, and returns True or False. Validators
never raise: a value of the wrong type, a non-numeric string handed to a
numeric check, or a missing ``match`` where one is required all validate
as False.

Validators are looked up by type name through :data:`VALIDATORS`, e.g.::

    >>> VALIDATORS['strand_plusminus']('+')
    True
    >>> validate_as_range('11', [1, 10])
    False

Custom types are added per format with
:meth:`format_pkg.format.FormatDescriptor.register_validator`.
"""

import math
import re
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional

from Bio.Data.IUPACData import protein_letters, unambiguous_dna_letters

from format_pkg.utils.named_colours import named_colour

__all__ = [
    'Validator',
    'VALIDATORS',
    'validate_as_boolean',
    'validate_as_string',
    'validate_as_integer',
    'validate_as_floating_point',
    'validate_as_range',
    'validate_as_comma_separated',
    'validate_as_case_insensitive',
    'validate_as_strand_integer',
    'validate_as_strand_plusminus',
    'validate_as_phase',
    'validate_as_rgb_string',
    'validate_as_colour',
    'validate_as_sequence',
    'validate_as_dna_sequence',
]

Validator = Callable[[Any, Optional[Any]], bool]

# Amino acids plus selenocysteine (U)
PROTEIN_ALPHABET = ''.join(sorted(set(protein_letters) | {'U'}))
# A, C, G, T plus the unknown base N
DNA_ALPHABET = ''.join(sorted(set(unambiguous_dna_letters) | {'N'}))

_INTEGER_RE = re.compile(r'[-+]?\d+')
_FLOAT_RE = re.compile(r'[-+]?\d+(?:\.\d*)?')
_COMMA_SEPARATED_RE = re.compile(r'[A-Za-z0-9_]+(?:,[A-Za-z0-9_]+)*,?')
_RGB_RE = re.compile(r'\d{1,3},\d{1,3},\d{1,3}')
_HEX_RE = re.compile(r'#?(?:[A-Fa-f0-9]{3}|[A-Fa-f0-9]{6})')
_SEQUENCE_RE = re.compile(f'[{PROTEIN_ALPHABET}]+', re.IGNORECASE)
_DNA_SEQUENCE_RE = re.compile(f'[{DNA_ALPHABET}]+', re.IGNORECASE)

STRAND_INTEGERS = frozenset({'0', '1', '-1'})
STRAND_SYMBOLS = frozenset({'+', '-', '?', '.'})
PHASES = frozenset({'0', '1', '2'})


def _as_text(value) -> Optional[str]:
    """Return the string form of a scalar value, or None for anything else."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return str(value)
    return None


def _as_number(value) -> Optional[float]:
    """Parse a value as a finite number, or None if it is not numeric."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    else:
        text = _as_text(value)
        if text is None:
            return None
        try:
            number = float(text.strip())
        except (ValueError, OverflowError):
            return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def _fullmatch(pattern, value) -> bool:
    text = _as_text(value)
    return text is not None and pattern.fullmatch(text) is not None


def validate_as_boolean(value, match=None) -> bool:
    """Valid if the value is numerically 0 or 1."""
    return _as_number(value) in (0.0, 1.0)


def validate_as_string(value, match=None) -> bool:
    """
    Valid if the value contains printable characters.

    When ``match`` is given the value must equal it exactly instead.
    """
    text = _as_text(value)
    if text is None:
        return False
    if match:
        return text == str(match)
    return any(char.isprintable() for char in text)


def validate_as_integer(value, match=None) -> bool:
    """Valid for an optionally signed run of digits."""
    return _fullmatch(_INTEGER_RE, value)


def validate_as_floating_point(value, match=None) -> bool:
    """Valid for an optionally signed number with an optional fractional part."""
    return _fullmatch(_FLOAT_RE, value)


def validate_as_range(value, match=None) -> bool:
    """
    Valid if the value is a number within ``match``, an inclusive [min, max] pair.

    A missing or malformed range never validates.
    """
    if not isinstance(match, (list, tuple)) or len(match) != 2:
        return False
    low, high = (_as_number(bound) for bound in match)
    number = _as_number(value)
    if low is None or high is None or number is None:
        return False
    return low <= number <= high


def validate_as_comma_separated(value, match=None) -> bool:
    """Valid for word tokens separated by commas; a trailing comma is allowed."""
    return _fullmatch(_COMMA_SEPARATED_RE, value)


def validate_as_case_insensitive(value, match=None) -> bool:
    """Valid if the value equals ``match`` ignoring case."""
    text = _as_text(value)
    if not match or text is None:
        return False
    return text.casefold() == str(match).casefold()


def validate_as_strand_integer(value, match=None) -> bool:
    """Valid for a strand written as 0, 1 or -1."""
    return _as_text(value) in STRAND_INTEGERS


def validate_as_strand_plusminus(value, match=None) -> bool:
    """Valid for a strand written as +, -, ? or ."""
    return _as_text(value) in STRAND_SYMBOLS


def validate_as_phase(value, match=None) -> bool:
    """Valid for a coding phase of 0, 1 or 2."""
    return _as_text(value) in PHASES


def validate_as_rgb_string(value, match=None) -> bool:
    """Valid for 'r,g,b' with 1-3 digits per channel."""
    # 0 stands in for '.' in some UCSC files
    if _as_number(value) == 0:
        return True
    return _fullmatch(_RGB_RE, value)


def validate_as_colour(value, match=None) -> bool:
    """Valid for an RGB string, a 3 or 6 digit hex code or a named colour."""
    if validate_as_rgb_string(value):
        return True
    if _fullmatch(_HEX_RE, value):
        return True
    return named_colour(_as_text(value)) is not None


def validate_as_sequence(value, match=None) -> bool:
    """Valid for a DNA, RNA or protein sequence."""
    return _fullmatch(_SEQUENCE_RE, value)


def validate_as_dna_sequence(value, match=None) -> bool:
    """Valid for a DNA sequence of A, C, G, T and N."""
    return _fullmatch(_DNA_SEQUENCE_RE, value)


VALIDATORS: Mapping[str, Validator] = MappingProxyType({
    'boolean': validate_as_boolean,
    'string': validate_as_string,
    'integer': validate_as_integer,
    'floating_point': validate_as_floating_point,
    'range': validate_as_range,
    'comma_separated': validate_as_comma_separated,
    'case_insensitive': validate_as_case_insensitive,
    'strand_integer': validate_as_strand_integer,
    'strand_plusminus': validate_as_strand_plusminus,
    'phase': validate_as_phase,
    'rgb_string': validate_as_rgb_string,
    'colour': validate_as_colour,
    'sequence': validate_as_sequence,
    'dna_sequence': validate_as_dna_sequence,
})
