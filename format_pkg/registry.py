"""Process-wide registry of format descriptors."""

from functools import lru_cache
from typing import Callable, Dict, List, Union

from format_pkg.exceptions import UnknownFormatError
from format_pkg.format import FormatDescriptor
from format_pkg.formats import build_bed, build_gff3, build_gtf
from format_pkg.logger import get_logger
from format_pkg.utils.formats import FormatName

__all__ = [
    'available_formats',
    'get_format',
    'resolve_format_name',
]

_BUILDERS: Dict[FormatName, Callable[[], FormatDescriptor]] = {
    FormatName.GFF3: build_gff3,
    FormatName.GTF: build_gtf,
    FormatName.BED: build_bed,
}


def resolve_format_name(name: Union[str, FormatName]) -> FormatName:
    """
    Resolve a format name, alias, extension or filename to a FormatName.

    Raises:
        UnknownFormatError: If nothing matches
    """
    try:
        return FormatName(name)
    except ValueError as e:
        raise UnknownFormatError(
            f"Unknown format '{name}'. Available formats: {', '.join(available_formats())}"
        ) from e


@lru_cache(maxsize=None)
def _build(format_name: FormatName) -> FormatDescriptor:
    get_logger().debug(f"Building descriptor for format '{format_name.value}'")
    return _BUILDERS[format_name]()


def get_format(name: Union[str, FormatName]) -> FormatDescriptor:
    """
    Return the shared descriptor for a format.

    Each descriptor is built once per process and must be treated as
    read-only; build a private copy with the ``build_*`` functions in
    :mod:`format_pkg.formats` to change its field table or order.

    Example:
        >>> get_format('gff2') is get_format('GTF')
        True
    """
    return _build(resolve_format_name(name))


def available_formats() -> List[str]:
    return [format_name.value for format_name in FormatName]
