"""
Records backed by a format descriptor.

A :class:`RecordView` wraps one row of raw values and exposes them by field
name or accessor name. Values are stored exactly as written; when a field
declares a conversion (for example the GTF strand), reading translates the
stored internal value into the format's external token and leaves any other
value unchanged::

    >>> from format_pkg.registry import get_format
    >>> record = RecordView.from_fields(get_format('gtf'), [
    ...     'chr1', 'ensembl', 'gene', '11869', '14409', '.', '1', '.', 'gene_id "G1";'])
    >>> record.strand
    '+'
    >>> record.strand = '-'
    >>> record.strand
    '-'
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence

from format_pkg.exceptions import RecordValidationError, UnknownFieldError
from format_pkg.format import FormatDescriptor, ValidationIssue
from format_pkg.logger import get_logger
from format_pkg.utils.settings import BaseSettings

__all__ = [
    'RecordView',
]


class RecordView:
    """Field access, validation and serialization for a single record."""

    @dataclass
    class Settings(BaseSettings):
        """Settings for record behaviour."""
        validate_on_set: bool = False

    def __init__(
        self,
        descriptor: FormatDescriptor,
        values: Optional[Sequence[Any]] = None,
        settings: Optional[Settings] = None
    ) -> None:
        # Attributes are set through object.__setattr__ because __setattr__
        # routes accessor names to record values.
        object.__setattr__(self, 'descriptor', descriptor)
        object.__setattr__(self, 'settings', settings if settings is not None else self.Settings())
        object.__setattr__(self, 'logger', get_logger())
        object.__setattr__(self, '_values', {})
        object.__setattr__(self, '_names', self._build_name_index())

        if values is not None:
            self._load(values)

    @classmethod
    def from_fields(
        cls,
        descriptor: FormatDescriptor,
        values: Sequence[Any],
        settings: Optional['RecordView.Settings'] = None
    ) -> 'RecordView':
        """Create a record from a raw row in the descriptor's column order."""
        return cls(descriptor, values, settings)

    def _build_name_index(self) -> Dict[str, str]:
        """Map both field names and accessor names to field names."""
        index = {}
        for field_name in self.descriptor.fields():
            index[field_name] = field_name
        for field_name in self.descriptor.fields():
            index.setdefault(self.descriptor.accessor_for(field_name), field_name)
        return index

    def _load(self, values: Sequence[Any]) -> None:
        names = self.descriptor.fields()
        if len(values) != len(names):
            self.logger.debug(
                f"Row has {len(values)} values, format '{self.descriptor.name}' "
                f"defines {len(names)} fields"
            )
        for index, field_name in enumerate(names):
            self._values[field_name] = values[index] if index < len(values) else None

    def _resolve(self, name: str) -> str:
        try:
            return self._names[name]
        except (KeyError, TypeError):
            raise UnknownFieldError(
                f"'{name}' is not a field or accessor of format '{self.descriptor.name}'"
            ) from None

    # ===== Access =====

    def fields(self) -> List[str]:
        return self.descriptor.fields()

    def accessors(self) -> List[str]:
        return [self.descriptor.accessor_for(name) for name in self.fields()]

    def raw(self, name: str):
        """Return the stored value of a field without any conversion."""
        return self._values.get(self._resolve(name))

    def get(self, name: str):
        """
        Return a field value in the format's external representation.

        Raises:
            UnknownFieldError: If name is neither a field nor an accessor
        """
        field_name = self._resolve(name)
        value = self._values.get(field_name)
        conversion = self.descriptor.get_conversion(field_name)
        if conversion is not None and value is not None:
            return conversion.to_external(value)
        return value

    def set(self, name: str, value) -> None:
        """
        Store a field value as given.

        Both internal codes and external tokens are accepted, e.g. 1 or '+'
        for a GTF strand. Nothing is validated unless the record's settings
        ask for it, and even then a bad value is only logged.
        """
        field_name = self._resolve(name)
        self._values[field_name] = value
        if self.settings.validate_on_set:
            external = self.get(field_name)
            if not self.descriptor.validate_field(field_name, external):
                info = self.descriptor.get_field_info(field_name)
                self.logger.add_validation_issue(
                    level='WARNING',
                    category='record',
                    message=f"Value {external!r} is not a valid {info.validator_type} for field '{field_name}'",
                    details={'format': self.descriptor.name, 'field': field_name, 'value': value},
                )

    def __getattr__(self, name):
        # Only called when normal attribute lookup fails
        if name.startswith('_'):
            raise AttributeError(name)
        try:
            return self.get(name)
        except UnknownFieldError as e:
            raise AttributeError(str(e)) from None

    def __setattr__(self, name, value):
        if name in self._names:
            self.set(name, value)
        else:
            object.__setattr__(self, name, value)

    def __getitem__(self, name):
        return self.get(name)

    def __setitem__(self, name, value):
        self.set(name, value)

    def to_dict(self) -> Dict[str, Any]:
        """Values keyed by accessor name, in external representation."""
        return {self.descriptor.accessor_for(name): self.get(name) for name in self.fields()}

    def __repr__(self):
        return f"<{self.__class__.__name__}({self.descriptor.name}: {self.to_dict()!r})>"

    # ===== Validation =====

    def validate(self) -> List[ValidationIssue]:
        """Validate every field's external value and return all failures."""
        return self.descriptor.validate_values([self.get(name) for name in self.fields()])

    def is_valid(self) -> bool:
        return not self.validate()

    def check(self) -> None:
        """
        Validate the record and raise if any field fails.

        Raises:
            RecordValidationError: With every failing field in ``issues``
        """
        issues = self.validate()
        if issues:
            names = ', '.join(issue.field for issue in issues)
            raise RecordValidationError(
                f"Invalid {self.descriptor.name} record, failing fields: {names}",
                issues,
            )

    # ===== Serialization =====

    def _render(self, field_name: str) -> str:
        value = self.get(field_name)
        if value is None or value == '':
            return self.descriptor.empty_column
        if isinstance(value, Mapping):
            specialization = self.descriptor.specialization
            style = specialization.attribute_style if specialization is not None else None
            if style is None:
                raise TypeError(
                    f"Format '{self.descriptor.name}' cannot render mapping value of field '{field_name}'"
                )
            return style.render(value)
        if isinstance(value, (list, tuple)):
            return ','.join(str(v) for v in value)
        return str(value)

    def to_fields(self) -> List[str]:
        """External string tokens in column order, ready to be written."""
        return [self._render(name) for name in self.fields()]

    def to_line(self) -> str:
        """The record as one delimited line, without a trailing newline."""
        delimiter = self.descriptor.delimiter if self.descriptor.delimiter is not None else '\t'
        return delimiter.join(self.to_fields())
