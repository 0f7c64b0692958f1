"""Tests for the report renderer (fixed markdown templates)."""

from __future__ import annotations

from gazetteer.extract import (
    extract_historical_context,
    extract_place_record,
    extract_search_results,
)
from gazetteer.models import HistoricalContext, ParentRelation, SubordinateUnit, TemporalRange
from gazetteer.render import (
    ATTRIBUTION,
    DEFAULT_LICENSE,
    NO_RESULTS,
    render_historical_context,
    render_place_details,
    render_raw,
    render_search_results,
)


# ═════════════════════════════════════════════════════════════════════════════
# Place details
# ═════════════════════════════════════════════════════════════════════════════


def test_place_details_omits_absent_sections() -> None:
    payload = {
        "sys_id": "hvd_1",
        "uri": "http://example.test/hvd_1",
        "data source": "CHGIS",
        "spellings": [],
        "temporal": {"begin": -206, "end": 220},
    }
    text = render_place_details(extract_place_record(payload, "hvd_1"))

    assert text == (
        "# Place Details\n"
        "\n"
        "**System ID**: hvd_1\n"
        "**URI**: http://example.test/hvd_1\n"
        "**Data Source**: CHGIS\n"
        f"**License**: {DEFAULT_LICENSE}\n"
        "\n"
        "## Time Period\n"
        "\n"
        "- **Start Year**: -206\n"
        "- **End Year**: 220\n"
        "- **Duration**: 426 years\n"
    )
    assert "## Place Names" not in text
    assert "## Administrative Type" not in text


def test_place_details_full_report_section_order(place_payload) -> None:
    text = render_place_details(extract_place_record(place_payload, "hvd_32180"))

    headings = [line for line in text.splitlines() if line.startswith("## ")]
    assert headings == [
        "## Place Names",
        "## Administrative Type",
        "## Time Period",
        "## Geographic Information",
    ]
    assert "- **traditional Chinese**: 蘇州" in text
    assert "- **English Translation**: prefecture" in text
    assert "- **Duration**: 523 years" in text
    assert "- **Coordinates**: 120.60°E, 31.30°N" in text
    assert "- **Present Location**: Suzhou City, Jiangsu" in text


def test_place_details_needs_both_coordinates(place_payload) -> None:
    del place_payload["spatial"]["degrees-latitude"]
    text = render_place_details(extract_place_record(place_payload, "hvd_32180"))
    assert "## Geographic Information" in text
    assert "**Coordinates**" not in text
    assert "- **Coordinate Type**: POINT" in text


def test_place_details_without_translation(place_payload) -> None:
    del place_payload["feature-type"]["translation"]
    text = render_place_details(extract_place_record(place_payload, "hvd_32180"))
    assert "- **Pinyin**: zhou" in text
    assert "English Translation" not in text


def test_place_details_is_deterministic(place_payload) -> None:
    first = render_place_details(extract_place_record(place_payload, "hvd_32180"))
    second = render_place_details(extract_place_record(place_payload, "hvd_32180"))
    assert first == second


# ═════════════════════════════════════════════════════════════════════════════
# Search results
# ═════════════════════════════════════════════════════════════════════════════


def test_search_results_empty_list() -> None:
    payload = {
        "memo": "Search for placename: 無",
        "count of displayed results": 0,
        "count of total results": 0,
        "placenames": [],
    }
    text = render_search_results(extract_search_results(payload))

    assert text == (
        "# CHGIS Place Search Results\n"
        "\n"
        "**Query Description**: Search for placename: 無\n"
        "**Displayed Results**: 0\n"
        "**Total Results**: 0\n"
        "\n"
        "## Search Results\n"
        "\n"
        f"{NO_RESULTS}\n"
    )
    assert "### " not in text


def test_search_results_numbered_in_upstream_order(search_payload) -> None:
    text = render_search_results(extract_search_results(search_payload))

    assert text.index("### 1. 蘇州\n") < text.index("### 2. 蘇州府\n")
    assert text.count("- **Coordinates**:") == 1
    assert "- **Parent Unit**: 江蘇" in text
    assert "- **Detail Link**: http://maps.cga.harvard.edu/tgaz/placename/hvd_32181" in text
    assert NO_RESULTS not in text


# ═════════════════════════════════════════════════════════════════════════════
# Historical context
# ═════════════════════════════════════════════════════════════════════════════


def test_historical_context_lists_only_named_parents() -> None:
    xml = (
        '<part-of from="906" to="1000"><parent-name>兩浙路</parent-name></part-of>'
        '<part-of from="1001" to="1127"><parent-id>hvd_1</parent-id></part-of>'
    )
    text = render_historical_context(extract_historical_context(xml, "hvd_9"))

    assert "## Historical Administrative Relationships" in text
    assert "### 1. 兩浙路\n- **Period**: 906 - 1000\n" in text
    assert "### 2." not in text


def test_historical_context_full_report(context_xml) -> None:
    text = render_historical_context(extract_historical_context(context_xml, "hvd_9999"))

    assert text.startswith("# Place Historical Context\n\n**System ID**: hvd_9999\n")
    assert "- **Duration**: 221 years" in text
    assert "- **Unknown script**: Pingjiang Fu" in text
    assert "### 1. 吳縣\n- **Pinyin**: Wu Xian\n- **Jurisdiction Period**: 906 - 1127\n" in text
    assert "### 2. 長洲縣\n\n" in text
    assert text.endswith(f"---\n\n{ATTRIBUTION}")


def test_historical_context_empty_document_has_header_and_footer_only() -> None:
    text = render_historical_context(extract_historical_context("<placename/>", "hvd_5"))
    assert text == f"# Place Historical Context\n\n**System ID**: hvd_5\n\n---\n\n{ATTRIBUTION}"


def test_historical_context_half_periods_are_hidden() -> None:
    context = HistoricalContext(
        system_id="hvd_1",
        temporal=TemporalRange(1, 2),
        parents=[ParentRelation("P", from_year="10")],
        subordinates=[SubordinateUnit("S", to_year="20")],
    )
    text = render_historical_context(context)
    assert "**Period**" not in text
    assert "**Jurisdiction Period**" not in text


# ═════════════════════════════════════════════════════════════════════════════
# Raw passthrough
# ═════════════════════════════════════════════════════════════════════════════


def test_render_raw_embeds_payload_verbatim() -> None:
    payload = "<placename>\n  <x/>\n</placename>"
    assert render_raw("Place Details", "xml", payload) == (
        f"# Place Details (XML Format)\n\n```xml\n{payload}\n```"
    )
