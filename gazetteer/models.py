# =============================================================================
# gazetteer/models.py  —  Data Models (everything that flows through a call)
# =============================================================================
#
# Nothing here is persisted.  Each tool call builds a query model, turns it
# into an UpstreamRequest, and extracts one of three fact records from the
# response:
#
#   PlaceRecord        ← place-detail JSON      (search_place_by_id)
#   SearchResultSet    ← search JSON            (search_places)
#   HistoricalContext  ← place XML              (get_place_historical_context)
#
# OPTIONAL FIELDS:
#   The upstream service gives no schema guarantee, so almost every field is
#   Optional.  The renderer checks presence on these records and never looks
#   at the raw payload.  A None here means "omit that part of the report".
# =============================================================================

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class OutputFormat(str, Enum):
    """Payload formats understood by the TGAZ API."""

    JSON = "json"
    XML = "xml"
    HTML = "html"

    @property
    def accept(self) -> str:
        """The Accept header value to send for this format."""
        return _ACCEPT_HEADERS[self]


_ACCEPT_HEADERS = {
    OutputFormat.JSON: "application/json",
    OutputFormat.XML: "application/xml",
    OutputFormat.HTML: "text/html",
}


# -----------------------------------------------------------------------------
# Validated queries — the output of gazetteer/validation.py
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ByIdQuery:
    place_id: str                      # "hvd_32180"
    format: OutputFormat = OutputFormat.JSON


@dataclass(frozen=True)
class SearchFilter:
    """Search criteria; at least one is set once validation has passed."""

    name: Optional[str] = None         # Chinese characters or pinyin
    year: Optional[int] = None         # -222 .. 1911
    feature_type: Optional[str] = None  # "xian", "zhou", "fu" ...
    parent: Optional[str] = None       # parent administrative unit
    source: Optional[str] = None       # "CHGIS" or "RAS"


@dataclass(frozen=True)
class SearchQuery:
    filters: SearchFilter
    format: OutputFormat = OutputFormat.JSON


@dataclass(frozen=True)
class ContextQuery:
    place_id: str


@dataclass(frozen=True)
class UpstreamRequest:
    """One GET against the gazetteer service."""

    url: str
    accept: str
    timeout: float                     # seconds; a single bounded attempt


# -----------------------------------------------------------------------------
# Shared fact records
# -----------------------------------------------------------------------------
@dataclass
class Spelling:
    script: str                        # "traditional Chinese", "Pinyin" ...
    written_form: str


@dataclass
class TemporalRange:
    begin: int
    end: int

    @property
    def duration(self) -> int:
        """Length of the range in whole years."""
        return self.end - self.begin


# -----------------------------------------------------------------------------
# PlaceRecord — search_place_by_id
# -----------------------------------------------------------------------------
@dataclass
class FeatureType:
    name: Optional[str] = None         # Chinese name of the administrative type
    transcription: Optional[str] = None
    translation: Optional[str] = None  # English, often missing upstream


@dataclass
class SpatialInfo:
    coordinate_type: Optional[str] = None  # "POINT", "POLYGON" ...
    longitude: Optional[str] = None
    latitude: Optional[str] = None
    present_location: Optional[str] = None

    @property
    def has_coordinates(self) -> bool:
        return bool(self.longitude) and bool(self.latitude)


@dataclass
class PlaceRecord:
    system_id: str
    uri: str
    data_source: Optional[str] = None
    license: Optional[str] = None
    spellings: list[Spelling] = field(default_factory=list)
    feature_type: Optional[FeatureType] = None
    temporal: Optional[TemporalRange] = None
    spatial: Optional[SpatialInfo] = None


# -----------------------------------------------------------------------------
# SearchResultSet — search_places
# -----------------------------------------------------------------------------
@dataclass
class PlaceSummary:
    name: Optional[str] = None
    system_id: Optional[str] = None
    transcription: Optional[str] = None
    years: Optional[str] = None        # free text, e.g. "1820 ~ 1911"
    feature_type: Optional[str] = None
    parent_name: Optional[str] = None
    coordinates: Optional[str] = None
    data_source: Optional[str] = None
    uri: Optional[str] = None


@dataclass
class SearchResultSet:
    memo: Optional[str] = None
    displayed_count: Optional[str] = None
    total_count: Optional[str] = None
    places: list[PlaceSummary] = field(default_factory=list)


# -----------------------------------------------------------------------------
# HistoricalContext — get_place_historical_context
# -----------------------------------------------------------------------------
@dataclass
class ParentRelation:
    parent_name: str
    from_year: Optional[str] = None
    to_year: Optional[str] = None


@dataclass
class SubordinateUnit:
    name: str
    transcription: Optional[str] = None
    from_year: Optional[str] = None
    to_year: Optional[str] = None


@dataclass
class HistoricalContext:
    system_id: str                     # as given by the caller
    spellings: list[Spelling] = field(default_factory=list)
    temporal: Optional[TemporalRange] = None
    parents: list[ParentRelation] = field(default_factory=list)
    subordinates: list[SubordinateUnit] = field(default_factory=list)
