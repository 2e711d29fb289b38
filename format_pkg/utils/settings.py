"""Base settings infrastructure for format descriptors and records."""

from dataclasses import asdict, fields
from copy import deepcopy
from typing import Dict, Any
from abc import ABC

__all__ = [
    'BaseSettings',
]


def _normalize_field_value(field_type, value):
    """Coerce raw values into the enum a settings field is annotated with."""
    # Handle Optional[MetadataSupport] or MetadataSupport annotations
    if 'MetadataSupport' in str(field_type):
        # Import here to avoid circular imports
        from format_pkg.utils.formats import MetadataSupport
        return MetadataSupport.normalize(value)
    return value


# ===== Base Settings Class =====
class BaseSettings(ABC):
    """Base class for all settings dataclasses with common functionality."""

    def copy(self):
        """Return a deep copy of settings."""
        return deepcopy(self)

    def update(self, **kwargs):
        """Update settings and return new instance (immutable pattern)."""
        new_settings = self.copy()

        # Get list of valid field names
        valid_fields = {f.name for f in fields(new_settings)}

        # Check for unknown fields
        unknown = set(kwargs.keys()) - valid_fields
        if unknown:
            allowed = ', '.join(sorted(valid_fields))
            unknown_str = ', '.join(f"'{k}'" for k in sorted(unknown))
            raise ValueError(
                f"Unknown setting(s) {unknown_str} for {self.__class__.__name__}. "
                f"Allowed settings: {allowed}"
            )

        for key, value in kwargs.items():
            field_info = next((f for f in fields(new_settings) if f.name == key), None)
            if field_info:
                value = _normalize_field_value(field_info.type, value)
            setattr(new_settings, key, value)

        return new_settings

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to dictionary for serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        """Create settings instance from dictionary."""
        valid_fields = {f.name for f in fields(cls)}

        unknown = set(data.keys()) - valid_fields
        if unknown:
            allowed = ', '.join(sorted(valid_fields))
            unknown_str = ', '.join(f"'{k}'" for k in sorted(unknown))
            raise ValueError(
                f"Unknown setting(s) {unknown_str} for {cls.__name__}. "
                f"Allowed settings: {allowed}"
            )

        normalized_data = {}
        for key, value in data.items():
            field_info = next((f for f in fields(cls) if f.name == key), None)
            if field_info:
                value = _normalize_field_value(field_info.type, value)
            normalized_data[key] = value

        return cls(**normalized_data)

    def __str__(self) -> str:
        """Pretty print settings for inspection."""
        lines = [f"{self.__class__.__name__}:"]
        for key, value in self.to_dict().items():
            lines.append(f"  {key}: {value}")
        return '\n'.join(lines)

    def __repr__(self) -> str:
        """Return repr string for debugging."""
        params = ', '.join(f"{k}={v!r}" for k, v in self.to_dict().items())
        return f"{self.__class__.__name__}({params})"
