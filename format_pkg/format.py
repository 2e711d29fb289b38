"""
Format descriptors.

A :class:`FormatDescriptor` describes one tabular file format: its metadata
(name, extensions, delimiter, multitrack/metadata support), a field table
mapping each column name to its validation rule and accessor name, and the
order of the columns.

Concrete formats build a descriptor once and then only read from it. The
field table and field order are set with :meth:`FormatDescriptor.set_field_info`
and :meth:`FormatDescriptor.set_field_order`; both raise
:class:`~format_pkg.exceptions.ConfigurationError` on empty or malformed input
and leave the previous table untouched.

Validation never raises. :meth:`FormatDescriptor.validate_as` returns False
for a non-conforming value, an unknown validator type or a missing ``match``
parameter, so a caller can check a whole record and collect every failure.
"""

from collections.abc import Mapping as MappingABC, Sequence as SequenceABC
from dataclasses import dataclass, field, fields
import inspect
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from format_pkg.exceptions import ConfigurationError
from format_pkg.logger import get_logger
from format_pkg.specialization import FormatSpecialization, ValueConversion
from format_pkg.utils.formats import MetadataSupport
from format_pkg.utils.settings import BaseSettings
from format_pkg.utils.validators import VALIDATORS

__all__ = [
    'FieldInfo',
    'FormatMetadata',
    'ValidationIssue',
    'FormatDescriptor',
]


@dataclass(frozen=True)
class FieldInfo:
    """Validation type, accessor name and match parameter of one field."""
    validator_type: Optional[str] = None
    accessor: Optional[str] = None
    match: Any = None
    optional: bool = False

    @classmethod
    def from_value(cls, field_name: str, value) -> 'FieldInfo':
        """
        Build a FieldInfo from a FieldInfo or a plain mapping.

        Raises:
            ConfigurationError: If the value is not a mapping or uses unknown keys
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, MappingABC):
            raise ConfigurationError(
                f"Field info for '{field_name}' must be a mapping, got {type(value).__name__}"
            )

        allowed = {f.name for f in fields(cls)}
        unknown = set(value.keys()) - allowed
        if unknown:
            unknown_str = ', '.join(f"'{k}'" for k in sorted(map(str, unknown)))
            raise ConfigurationError(
                f"Unknown key(s) {unknown_str} in field info for '{field_name}'. "
                f"Allowed keys: {', '.join(sorted(allowed))}"
            )

        validator_type = value.get('validator_type')
        if validator_type is not None and not isinstance(validator_type, str):
            raise ConfigurationError(f"Validator type for '{field_name}' must be a string")
        accessor = value.get('accessor')
        if accessor is not None and not isinstance(accessor, str):
            raise ConfigurationError(f"Accessor for '{field_name}' must be a string")

        match = value.get('match')
        if isinstance(match, list):
            match = tuple(match)

        return cls(
            validator_type=validator_type,
            accessor=accessor,
            match=match,
            optional=bool(value.get('optional', False)),
        )

    def get(self, key: str, default=None):
        """Return a named attribute, or ``default`` if there is no such key."""
        if key not in {f.name for f in fields(self)}:
            return default
        return getattr(self, key)

    def is_empty(self) -> bool:
        return self == FieldInfo()


@dataclass
class FormatMetadata(BaseSettings):
    """Format-level metadata of a descriptor."""
    name: str = ""
    extensions: List[str] = field(default_factory=lambda: ['txt'])
    delimiter: Optional[str] = None
    delimiter_regex: Optional[str] = None
    empty_column: str = ""
    can_multitrack: bool = False
    can_metadata: MetadataSupport = MetadataSupport.NEVER
    metadata_info: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        self.can_metadata = MetadataSupport.normalize(self.can_metadata)
        self.extensions = list(self.extensions)


@dataclass(frozen=True)
class ValidationIssue:
    """A single field value that failed validation."""
    field: str
    value: Any
    validator_type: Optional[str]
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'field': self.field,
            'value': self.value,
            'validator_type': self.validator_type,
            'message': self.message,
        }


class FormatDescriptor:
    """
    Declarative schema of a tabular file format.

    Args:
        metadata: Format-level metadata (defaults to an unnamed '.txt' format)
        field_info: Optional initial field table, see :meth:`set_field_info`
        field_order: Optional initial field order, see :meth:`set_field_order`
        specialization: Optional overrides for formats that diverge from the
            generic representation (fixed column order, value conversions,
            extra validator types)

    Example:
        >>> descriptor = FormatDescriptor(
        ...     FormatMetadata(name='pairs', delimiter='\\t'),
        ...     field_info={'chrom': {'validator_type': 'string'},
        ...                 'pos': {'validator_type': 'integer', 'accessor': 'position'}},
        ...     field_order=['chrom', 'pos'],
        ... )
        >>> descriptor.get_accessors()
        ['chrom', 'position']
        >>> descriptor.validate_field('pos', 'abc')
        False
    """

    def __init__(
        self,
        metadata: Optional[FormatMetadata] = None,
        field_info: Optional[Mapping[str, Any]] = None,
        field_order: Optional[Sequence[str]] = None,
        specialization: Optional[FormatSpecialization] = None,
    ) -> None:
        self.logger = get_logger()
        self.metadata = metadata if metadata is not None else FormatMetadata()
        self.specialization = specialization
        self._field_info: Dict[str, FieldInfo] = {}
        self._field_order: List[str] = []
        self._validators: Dict[str, Callable] = dict(VALIDATORS)

        if specialization is not None:
            for name, predicate in specialization.validators.items():
                self.register_validator(name, predicate)

        if field_info is not None:
            self.set_field_info(field_info)
        if field_order is not None:
            self.set_field_order(field_order)

    def __repr__(self):
        return (
            f"<{self.__class__.__name__}(name={self.name!r}, "
            f"fields={len(self._field_order)})>"
        )

    # ===== Basic accessors =====

    @property
    def name(self) -> str:
        return self.metadata.name or ''

    @property
    def extensions(self) -> List[str]:
        return list(self.metadata.extensions or [])

    @property
    def delimiter(self) -> Optional[str]:
        return self.metadata.delimiter

    @property
    def delimiter_regex(self) -> Optional[str]:
        return self.metadata.delimiter_regex

    @property
    def empty_column(self) -> str:
        return self.metadata.empty_column or ''

    @property
    def can_multitrack(self) -> bool:
        return bool(self.metadata.can_multitrack)

    @property
    def can_metadata(self) -> MetadataSupport:
        return self.metadata.can_metadata

    def get_metadata_info(self) -> Dict[str, Any]:
        return self.metadata.metadata_info

    # ===== Field table =====

    def set_field_info(self, info: Mapping[str, Any]) -> None:
        """
        Replace the field table.

        Args:
            info: Non-empty mapping of field name to FieldInfo or to a mapping
                with the keys 'validator_type', 'accessor', 'match', 'optional'

        Raises:
            ConfigurationError: If info is empty, not a mapping, or has a
                malformed entry. The previous table is kept.
        """
        if not isinstance(info, MappingABC) or not info:
            self.logger.error(f"Rejected field info for format '{self.name}': {info!r}")
            raise ConfigurationError("Field info must be a non-empty mapping")

        table = {}
        for field_name, value in info.items():
            if not isinstance(field_name, str) or not field_name:
                raise ConfigurationError(f"Field names must be non-empty strings, got {field_name!r}")
            table[field_name] = FieldInfo.from_value(field_name, value)

        self._field_info = table
        self.logger.debug(f"Format '{self.name}': field info set for {len(table)} fields")

    def get_field_info_table(self) -> Dict[str, FieldInfo]:
        return dict(self._field_info)

    def set_field_order(self, order: Sequence[str]) -> None:
        """
        Replace the field order.

        Args:
            order: Non-empty sequence of field names

        Raises:
            ConfigurationError: If order is empty, a bare string, or contains
                anything but non-empty strings. The previous order is kept.
        """
        if (
            isinstance(order, (str, bytes))
            or not isinstance(order, SequenceABC)
            or not order
        ):
            self.logger.error(f"Rejected field order for format '{self.name}': {order!r}")
            raise ConfigurationError("Field order must be a non-empty sequence of field names")

        if not all(isinstance(name, str) and name for name in order):
            raise ConfigurationError("Field order must contain only non-empty strings")

        self._field_order = list(order)
        missing = [name for name in order if name not in self._field_info]
        if missing and self._field_info:
            self.logger.debug(f"Format '{self.name}': no field info for {', '.join(missing)}")

    def get_field_order(self) -> List[str]:
        return list(self._field_order)

    def fields(self) -> List[str]:
        """
        Column order used to map raw rows onto fields.

        A specialization with its own field order replaces the generic order
        entirely.
        """
        if self.specialization is not None:
            special = self.specialization.fields()
            if special is not None:
                return list(special)
        return self.get_field_order()

    def get_field_info(self, field_name: Optional[str]) -> FieldInfo:
        """Return the info for a field, or an empty FieldInfo if it is unknown."""
        if not field_name:
            return FieldInfo()
        return self._field_info.get(field_name, FieldInfo())

    def get_value_for_field(self, field_name: Optional[str], key: Optional[str]):
        """Return one attribute of a field's info, or None if field or key is unknown."""
        if not field_name or not key:
            return None
        info = self._field_info.get(field_name)
        if info is None:
            return None
        return info.get(key)

    def accessor_for(self, field_name: str) -> str:
        return self.get_field_info(field_name).accessor or field_name

    def get_accessors(self) -> List[str]:
        """Accessor names, one per column of :meth:`fields`."""
        return [self.accessor_for(name) for name in self.fields()]

    # ===== Conversions =====

    def get_conversion(self, field_name: str) -> Optional[ValueConversion]:
        """Return the value conversion declared for a field, if any."""
        if self.specialization is None:
            return None
        return self.specialization.get_conversion(field_name)

    def strand_conversion(self) -> Mapping[Any, Any]:
        """Read-only strand mapping (empty for formats that store strand as-is)."""
        if self.specialization is None:
            return {}
        return self.specialization.strand_conversion()

    # ===== Validation =====

    def register_validator(self, validator_type: str, predicate: Callable) -> None:
        """
        Add or replace a validator type for this descriptor only.

        Raises:
            ConfigurationError: If the name is empty or predicate is not callable
        """
        if not isinstance(validator_type, str) or not validator_type:
            raise ConfigurationError("Validator type must be a non-empty string")
        if not callable(predicate):
            raise ConfigurationError(f"Validator '{validator_type}' must be callable")
        try:
            inspect.signature(predicate).bind(None, None)
        except TypeError:
            self.logger.error(f"Rejected validator '{validator_type}' for format '{self.name}'")
            raise ConfigurationError(
                f"Validator '{validator_type}' must accept (value, match) arguments"
            ) from None
        except ValueError:
            # no introspectable signature (some builtins)
            pass
        self._validators[validator_type] = predicate

    def validator_types(self) -> List[str]:
        return sorted(self._validators)

    def validate_as(self, validator_type: Optional[str], value, match=None) -> bool:
        """
        Check a value against a named validator type.

        Returns False when the type or value is missing or no validator is
        registered under that name.
        """
        if not validator_type or value is None:
            return False
        predicate = self._validators.get(validator_type)
        if predicate is None:
            return False
        try:
            return bool(predicate(value, match))
        except Exception as e:
            self.logger.debug(f"Validator '{validator_type}' failed on {value!r}: {e}")
            return False

    def validate_field(self, field_name: str, value) -> bool:
        """
        Check a value against the rule declared for a field.

        Fields without a declared validator type accept anything, and optional
        fields accept a missing value or the empty-column token.
        """
        info = self.get_field_info(field_name)
        if info.optional and (value is None or value == self.empty_column):
            return True
        if info.validator_type is None:
            return True
        return self.validate_as(info.validator_type, value, info.match)

    def validate_values(self, values: Sequence[Any]) -> List[ValidationIssue]:
        """
        Validate a raw row of values in column order and collect every failure.

        A row whose length differs from the number of fields is reported as a
        single issue on the pseudo-field '*'; the overlapping columns are still
        checked.
        """
        names = self.fields()
        issues = []

        if len(values) != len(names):
            issues.append(ValidationIssue(
                field='*',
                value=len(values),
                validator_type=None,
                message=f"Expected {len(names)} columns for format '{self.name}', got {len(values)}",
            ))

        for field_name, value in zip(names, values):
            if not self.validate_field(field_name, value):
                info = self.get_field_info(field_name)
                issues.append(ValidationIssue(
                    field=field_name,
                    value=value,
                    validator_type=info.validator_type,
                    message=f"Value {value!r} is not a valid {info.validator_type}",
                ))

        return issues
