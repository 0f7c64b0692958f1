# =============================================================================
# gazetteer/validation.py  —  Parameter Validator
# =============================================================================
#
# Every check here runs BEFORE any network call.  A failure raises
# InvalidParamsError with a message the caller can act on; nothing is
# clamped or silently corrected.
#
# RULES:
#   - place ids look like "hvd_32180"
#   - each tool has its own set of legal formats (json is the default)
#   - a search needs at least one filter; there is no "list everything"
#   - search years are bounded by the gazetteer's coverage: -222 .. 1911
# =============================================================================

import re
from typing import Optional

from gazetteer.errors import InvalidParamsError
from gazetteer.models import (
    ByIdQuery,
    ContextQuery,
    OutputFormat,
    SearchFilter,
    SearchQuery,
)

PLACE_ID_PATTERN = re.compile(r"^hvd_\d+$", re.ASCII)

MIN_YEAR = -222
MAX_YEAR = 1911

BY_ID_FORMATS = (OutputFormat.JSON, OutputFormat.XML)
SEARCH_FORMATS = (OutputFormat.JSON, OutputFormat.XML, OutputFormat.HTML)

SOURCES = ("CHGIS", "RAS")


def _check_place_id(place_id) -> str:
    # fullmatch: "$" alone would also accept a trailing newline.
    if not isinstance(place_id, str) or not PLACE_ID_PATTERN.fullmatch(place_id):
        raise InvalidParamsError(
            "Invalid ID format. Expected format: hvd_numbers (e.g., hvd_32180)"
        )
    return place_id


def _check_format(value, allowed: tuple) -> OutputFormat:
    if value is None or (isinstance(value, str) and not value.strip()):
        return OutputFormat.JSON

    legal = ", ".join(f.value for f in allowed)
    if not isinstance(value, str):
        raise InvalidParamsError(f"Invalid format {value!r}. Expected one of: {legal}")

    normalized = value.strip().lower()
    for fmt in allowed:
        if fmt.value == normalized:
            return fmt
    raise InvalidParamsError(f"Unsupported format '{value}'. Expected one of: {legal}")


def _clean_text(value, field_name: str) -> Optional[str]:
    """Strip a string filter; empty or whitespace-only counts as absent."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise InvalidParamsError(f"Parameter '{field_name}' must be a string")
    return value.strip() or None


def _check_year(value) -> Optional[int]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None

    # bool is an int subclass; True is not a year.
    if isinstance(value, bool):
        raise InvalidParamsError("Parameter 'year' must be an integer")
    if isinstance(value, int):
        year = value
    elif isinstance(value, float) and value.is_integer():
        year = int(value)
    elif isinstance(value, str):
        try:
            year = int(value.strip())
        except ValueError:
            raise InvalidParamsError(f"Parameter 'year' must be an integer, got '{value}'")
    else:
        raise InvalidParamsError("Parameter 'year' must be an integer")

    if not MIN_YEAR <= year <= MAX_YEAR:
        raise InvalidParamsError(
            f"Year {year} is out of range. Supported range: {MIN_YEAR} to {MAX_YEAR}"
        )
    return year


def validate_by_id(place_id, format=None) -> ByIdQuery:
    """Validate search_place_by_id arguments."""
    return ByIdQuery(
        place_id=_check_place_id(place_id),
        format=_check_format(format, BY_ID_FORMATS),
    )


def validate_search(
    name=None,
    year=None,
    feature_type=None,
    parent=None,
    source=None,
    format=None,
) -> SearchQuery:
    """Validate search_places arguments.

    Raises:
        InvalidParamsError: if no filter is given, the year is outside
            [-222, 1911], the source is not CHGIS/RAS, or the format is not
            json/xml/html.
    """
    filters = SearchFilter(
        name=_clean_text(name, "name"),
        year=_check_year(year),
        feature_type=_clean_text(feature_type, "feature_type"),
        parent=_clean_text(parent, "parent"),
        source=_clean_text(source, "source"),
    )

    if all(
        value is None
        for value in (filters.name, filters.year, filters.feature_type,
                      filters.parent, filters.source)
    ):
        raise InvalidParamsError("At least one search parameter must be provided")

    if filters.source is not None and filters.source not in SOURCES:
        raise InvalidParamsError(
            f"Unsupported source '{filters.source}'. Expected one of: {', '.join(SOURCES)}"
        )

    return SearchQuery(filters=filters, format=_check_format(format, SEARCH_FORMATS))


def validate_context_id(place_id) -> ContextQuery:
    """Validate get_place_historical_context arguments (always xml upstream)."""
    return ContextQuery(place_id=_check_place_id(place_id))
