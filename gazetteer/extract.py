# =============================================================================
# gazetteer/extract.py  —  Response Extractor
# =============================================================================
#
# Turns upstream payloads into the fact records of gazetteer/models.py.
#
# JSON (place detail, search):
#   Fields are read by their known key names.  Everything except the record
#   identity is optional; a missing or oddly-typed value becomes None and
#   the renderer drops that part of the report.
#
# XML (historical context):
#   The TGAZ XML is treated as semi-structured text, not parsed.  Four
#   independent scans run over the raw document, each preserving document
#   order and each returning an empty result when nothing matches:
#
#     1. spellings     <written-form script="...">...</written-form>
#     2. temporal      <begin>..</begin> and <end>..</end>
#     3. parents       <part-of ...> ... <parent-name>..</parent-name> ...</part-of>
#     4. subordinates  <subordinate-unit ...> ... <name>..</name> ...</subordinate-unit>
#
#   Unknown or malformed tags elsewhere in the document are ignored.
# =============================================================================

import html
import json
import re
from typing import Optional

from gazetteer.models import (
    FeatureType,
    HistoricalContext,
    ParentRelation,
    PlaceRecord,
    PlaceSummary,
    SearchResultSet,
    SpatialInfo,
    Spelling,
    SubordinateUnit,
    TemporalRange,
)

UNKNOWN_SCRIPT = "Unknown script"
UNKNOWN_VALUE = "Unknown"

_WRITTEN_FORM = re.compile(r"<written-form(\s[^>]*)?>([^<]+)</written-form>")
_SCRIPT_ATTR = re.compile(r'(?<![\w-])script="([^"]+)"')
_BEGIN = re.compile(r"<begin>([^<]+)</begin>")
_END = re.compile(r"<end>([^<]+)</end>")
_PART_OF = re.compile(r"<part-of(?:\s[^>]*)?>.*?</part-of>", re.DOTALL)
_PARENT_NAME = re.compile(r"<parent-name>([^<]+)</parent-name>")
_SUBORDINATE = re.compile(r"<subordinate-unit(?:\s[^>]*)?>.*?</subordinate-unit>", re.DOTALL)
_NAME = re.compile(r"<name>([^<]+)</name>")
_TRANSCRIBED_NAME = re.compile(r"<transcribed-name>([^<]+)</transcribed-name>")
_FROM_ATTR = re.compile(r'(?<![\w-])from="([^"]+)"')
_TO_ATTR = re.compile(r'(?<![\w-])to="([^"]+)"')


# =============================================================================
# Small helpers
# =============================================================================
def _text(value) -> Optional[str]:
    """Scalar JSON value as stripped text; None for missing/empty/non-scalar."""
    if value is None or isinstance(value, (dict, list, bool)):
        return None
    text = str(value).strip()
    return text or None


def _int(value) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def _temporal(begin, end) -> Optional[TemporalRange]:
    """A range only when both bounds are present; never a half range."""
    begin_year, end_year = _int(begin), _int(end)
    if begin_year is None or end_year is None:
        return None
    return TemporalRange(begin=begin_year, end=end_year)


def _first(pattern: re.Pattern, text: str) -> Optional[str]:
    match = pattern.search(text)
    if match is None:
        return None
    return html.unescape(match.group(1)).strip() or None


def parse_json_payload(text: str) -> dict:
    """Decode a JSON object payload.

    Raises:
        ValueError: if the text is not JSON or not a JSON object.
    """
    payload = json.loads(text)
    if not isinstance(payload, dict):
        raise ValueError(f"Expected a JSON object, got {type(payload).__name__}")
    return payload


# =============================================================================
# PlaceRecord (JSON)
# =============================================================================
def extract_place_record(payload: dict, requested_id: str) -> PlaceRecord:
    """Pull the place-detail facts out of a TGAZ placename JSON object.

    The record id falls back to ``requested_id`` when the payload carries
    no ``sys_id``.
    """
    spellings = []
    for item in payload.get("spellings") or []:
        if not isinstance(item, dict):
            continue
        written = _text(item.get("written form"))
        if written is None:
            continue
        spellings.append(Spelling(script=_text(item.get("script")) or UNKNOWN_SCRIPT,
                                  written_form=written))

    feature_type = None
    ft = payload.get("feature-type")
    if isinstance(ft, dict):
        candidate = FeatureType(
            name=_text(ft.get("name")),
            transcription=_text(ft.get("transcription")),
            translation=_text(ft.get("translation")),
        )
        if candidate.name or candidate.transcription or candidate.translation:
            feature_type = candidate

    temporal = None
    temp = payload.get("temporal")
    if isinstance(temp, dict):
        temporal = _temporal(temp.get("begin"), temp.get("end"))

    spatial = None
    sp = payload.get("spatial")
    if isinstance(sp, dict):
        candidate = SpatialInfo(
            coordinate_type=_text(sp.get("object-type")),
            longitude=_text(sp.get("degrees-longitude")),
            latitude=_text(sp.get("degrees-latitude")),
            present_location=_text(sp.get("present-location")),
        )
        if (candidate.coordinate_type or candidate.has_coordinates
                or candidate.present_location):
            spatial = candidate

    return PlaceRecord(
        system_id=_text(payload.get("sys_id")) or requested_id,
        uri=_text(payload.get("uri")) or UNKNOWN_VALUE,
        data_source=_text(payload.get("data source")) or _text(payload.get("system")),
        license=_text(payload.get("license")),
        spellings=spellings,
        feature_type=feature_type,
        temporal=temporal,
        spatial=spatial,
    )


# =============================================================================
# SearchResultSet (JSON)
# =============================================================================
def extract_search_results(payload: dict) -> SearchResultSet:
    """Pull the result list out of a TGAZ search JSON object, in upstream order."""
    places = []
    for item in payload.get("placenames") or []:
        if not isinstance(item, dict):
            continue
        places.append(PlaceSummary(
            name=_text(item.get("name")),
            system_id=_text(item.get("sys_id")),
            transcription=_text(item.get("transcription")),
            years=_text(item.get("years")),
            feature_type=_text(item.get("feature type")),
            parent_name=_text(item.get("parent name")),
            coordinates=_text(item.get("xy coordinates")),
            data_source=_text(item.get("data source")),
            uri=_text(item.get("uri")),
        ))

    return SearchResultSet(
        memo=_text(payload.get("memo")),
        displayed_count=_text(payload.get("count of displayed results")),
        total_count=_text(payload.get("count of total results")),
        places=places,
    )


# =============================================================================
# HistoricalContext (XML text scans)
# =============================================================================
def scan_spellings(xml_text: str) -> list[Spelling]:
    spellings = []
    for match in _WRITTEN_FORM.finditer(xml_text):
        written = html.unescape(match.group(2)).strip()
        if not written:
            continue
        script = _first(_SCRIPT_ATTR, match.group(1) or "")
        spellings.append(Spelling(script=script or UNKNOWN_SCRIPT, written_form=written))
    return spellings


def scan_temporal(xml_text: str) -> Optional[TemporalRange]:
    return _temporal(_first(_BEGIN, xml_text), _first(_END, xml_text))


def scan_parent_relations(xml_text: str) -> list[ParentRelation]:
    parents = []
    for block in _PART_OF.findall(xml_text):
        parent_name = _first(_PARENT_NAME, block)
        if parent_name is None:
            continue
        parents.append(ParentRelation(
            parent_name=parent_name,
            from_year=_first(_FROM_ATTR, block),
            to_year=_first(_TO_ATTR, block),
        ))
    return parents


def scan_subordinate_units(xml_text: str) -> list[SubordinateUnit]:
    units = []
    for block in _SUBORDINATE.findall(xml_text):
        name = _first(_NAME, block)
        if name is None:
            continue
        units.append(SubordinateUnit(
            name=name,
            transcription=_first(_TRANSCRIBED_NAME, block),
            from_year=_first(_FROM_ATTR, block),
            to_year=_first(_TO_ATTR, block),
        ))
    return units


def extract_historical_context(xml_text: str, requested_id: str) -> HistoricalContext:
    """Run the four XML scans.  The id is the caller's, not re-read from the XML."""
    return HistoricalContext(
        system_id=requested_id,
        spellings=scan_spellings(xml_text),
        temporal=scan_temporal(xml_text),
        parents=scan_parent_relations(xml_text),
        subordinates=scan_subordinate_units(xml_text),
    )
