# =============================================================================
# gazetteer/render.py  —  Report Renderer
# =============================================================================
#
# Three fixed markdown templates, one per tool, plus the raw passthrough
# used when a caller asks for xml/html instead of json.
#
# Every function is pure: the same record renders to the same text, byte for
# byte.  Sections are driven by presence checks on the record; a section
# with no data is left out entirely, never rendered empty.  Collections are
# rendered in the order they were extracted.
# =============================================================================

from gazetteer.models import (
    HistoricalContext,
    PlaceRecord,
    SearchResultSet,
)

DEFAULT_LICENSE = "CC BY-NC 4.0"
NOT_AVAILABLE = "N/A"
NO_RESULTS = "No matching place records found."
ATTRIBUTION = "*Data source: CHGIS (China Historical Geographic Information System)*"


def _or_na(value) -> str:
    return NOT_AVAILABLE if value is None else str(value)


def _period(from_year, to_year):
    """'from - to' when both bounds exist, else None."""
    if from_year is None or to_year is None:
        return None
    return f"{from_year} - {to_year}"


def _time_period_section(temporal) -> list[str]:
    return [
        "## Time Period",
        "",
        f"- **Start Year**: {temporal.begin}",
        f"- **End Year**: {temporal.end}",
        f"- **Duration**: {temporal.duration} years",
        "",
    ]


# =============================================================================
# Place-detail report (search_place_by_id, json)
# =============================================================================
def render_place_details(record: PlaceRecord) -> str:
    lines = [
        "# Place Details",
        "",
        f"**System ID**: {record.system_id}",
        f"**URI**: {record.uri}",
        f"**Data Source**: {_or_na(record.data_source)}",
        f"**License**: {record.license or DEFAULT_LICENSE}",
        "",
    ]

    if record.spellings:
        lines += ["## Place Names", ""]
        lines += [f"- **{s.script}**: {s.written_form}" for s in record.spellings]
        lines.append("")

    ft = record.feature_type
    if ft is not None:
        lines += [
            "## Administrative Type",
            "",
            f"- **Chinese Name**: {_or_na(ft.name)}",
            f"- **Pinyin**: {_or_na(ft.transcription)}",
        ]
        if ft.translation:
            lines.append(f"- **English Translation**: {ft.translation}")
        lines.append("")

    if record.temporal is not None:
        lines += _time_period_section(record.temporal)

    spatial = record.spatial
    if spatial is not None:
        lines += ["## Geographic Information", ""]
        if spatial.coordinate_type:
            lines.append(f"- **Coordinate Type**: {spatial.coordinate_type}")
        if spatial.has_coordinates:
            lines.append(f"- **Coordinates**: {spatial.longitude}°E, {spatial.latitude}°N")
        if spatial.present_location:
            lines.append(f"- **Present Location**: {spatial.present_location.strip()}")
        lines.append("")

    return "\n".join(lines)


# =============================================================================
# Search-result-list report (search_places, json)
# =============================================================================
def render_search_results(results: SearchResultSet) -> str:
    lines = [
        "# CHGIS Place Search Results",
        "",
        f"**Query Description**: {_or_na(results.memo)}",
        f"**Displayed Results**: {_or_na(results.displayed_count)}",
        f"**Total Results**: {_or_na(results.total_count)}",
        "",
        "## Search Results",
        "",
    ]

    if not results.places:
        lines += [NO_RESULTS, ""]
        return "\n".join(lines)

    for index, place in enumerate(results.places, start=1):
        lines += [
            f"### {index}. {_or_na(place.name)}",
            "",
            f"- **System ID**: {_or_na(place.system_id)}",
            f"- **Pinyin**: {_or_na(place.transcription)}",
            f"- **Years**: {_or_na(place.years)}",
            f"- **Feature Type**: {_or_na(place.feature_type)}",
            f"- **Parent Unit**: {_or_na(place.parent_name)}",
        ]
        if place.coordinates:
            lines.append(f"- **Coordinates**: {place.coordinates}")
        lines += [
            f"- **Data Source**: {_or_na(place.data_source)}",
            f"- **Detail Link**: {_or_na(place.uri)}",
            "",
        ]

    return "\n".join(lines)


# =============================================================================
# Historical-context report (get_place_historical_context)
# =============================================================================
def render_historical_context(context: HistoricalContext) -> str:
    lines = [
        "# Place Historical Context",
        "",
        f"**System ID**: {context.system_id}",
        "",
    ]

    if context.spellings:
        lines += ["## Historical Names", ""]
        lines += [f"- **{s.script}**: {s.written_form}" for s in context.spellings]
        lines.append("")

    if context.temporal is not None:
        lines += _time_period_section(context.temporal)

    if context.parents:
        lines += ["## Historical Administrative Relationships", ""]
        for index, parent in enumerate(context.parents, start=1):
            lines.append(f"### {index}. {parent.parent_name}")
            period = _period(parent.from_year, parent.to_year)
            if period:
                lines.append(f"- **Period**: {period}")
            lines.append("")

    if context.subordinates:
        lines += ["## Subordinate Units", ""]
        for index, unit in enumerate(context.subordinates, start=1):
            lines.append(f"### {index}. {unit.name}")
            if unit.transcription:
                lines.append(f"- **Pinyin**: {unit.transcription}")
            period = _period(unit.from_year, unit.to_year)
            if period:
                lines.append(f"- **Jurisdiction Period**: {period}")
            lines.append("")

    lines += ["---", "", ATTRIBUTION]
    return "\n".join(lines)


# =============================================================================
# Raw passthrough (xml / html requests)
# =============================================================================
def render_raw(title: str, fmt: str, payload: str) -> str:
    """Embed the upstream payload verbatim in a fenced block labelled ``fmt``."""
    return f"# {title} ({fmt.upper()} Format)\n\n```{fmt}\n{payload}\n```"
