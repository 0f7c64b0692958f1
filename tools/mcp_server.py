# =============================================================================
# tools/mcp_server.py  —  FastMCP Tool Server (the CHGIS gazetteer tools)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Exposes three MCP tools backed by the CHGIS Temporal Gazetteer (TGAZ):
#
#     search_place_by_id            one place record, by hvd_ id
#     search_places                 filtered place search
#     get_place_historical_context  names, time range, parents, subordinates
#
#   Each tool is a thin wrapper: it hands its arguments to the
#   ToolDispatcher in gazetteer/dispatcher.py and returns the markdown
#   report it gets back.  Validation, HTTP, extraction and rendering all
#   live in gazetteer/.
#
# ERRORS:
#   The dispatcher raises GazetteerError subclasses carrying an error code
#   (InvalidParams / MethodNotFound / InternalError).  We re-raise them as
#   FastMCP ToolErrors with the message "<Code>: <reason>" so the caller
#   sees both.
#
# SCHEMAS:
#   The id pattern, the year range and the format/source enums are
#   advertised in the tool schemas as annotations only.  Enforcement stays
#   in gazetteer/validation.py so that every bad input is reported the same
#   way, as InvalidParams.
#
# RUNNING THIS SERVER:
#     a) python main.py              (loads .env, then serves on stdio)
#     b) python -m tools.mcp_server
# =============================================================================

import logging
import sys
from typing import Annotated, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field

from gazetteer.config import SERVER_NAME, SERVER_VERSION, load_settings
from gazetteer.dispatcher import (
    GET_PLACE_HISTORICAL_CONTEXT,
    SEARCH_PLACE_BY_ID,
    SEARCH_PLACES,
    ToolDispatcher,
)
from gazetteer.errors import GazetteerError
from gazetteer.query import QueryBuilder
from gazetteer.validation import MAX_YEAR, MIN_YEAR, PLACE_ID_PATTERN, SOURCES

# =============================================================================
# Logging Setup
# =============================================================================
# STDERR only: stdout is the MCP stdio transport, and a stray log line there
# would corrupt the protocol stream.
#
# Colors: CYAN for incoming calls, YELLOW for status, GREEN for responses.
# =============================================================================
_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RESET = "\033[0m"

settings = load_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s [MCP] %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stderr,
)


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items() if v is not None)
    logging.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logging.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, text: str) -> str:
    """Log the size of the rendered report in GREEN, then return it."""
    first_line = text.splitlines()[0] if text else ""
    logging.info(f"{_GREEN}  ← {tool_name} response: {len(text)} chars, {first_line!r}{_RESET}")
    return text


# =============================================================================
# Server + dispatcher
# =============================================================================
# The base URL is fixed for the process lifetime and threaded into the
# QueryBuilder here.  Tests swap `dispatcher` for one with a fake fetcher.
mcp = FastMCP(SERVER_NAME, version=SERVER_VERSION)
dispatcher = ToolDispatcher(QueryBuilder(settings.base_url))


def _run(tool_name: str, **arguments) -> str:
    _log_request(tool_name, **arguments)
    try:
        text = dispatcher.dispatch(tool_name, arguments)
    except GazetteerError as e:
        _log_status(f"{e.code.value}: {e.message}")
        raise ToolError(f"{e.code.value}: {e.message}") from e
    return _log_response(tool_name, text)


PlaceId = Annotated[
    str,
    Field(
        description="Place unique ID (format: hvd_numbers, e.g., hvd_32180)",
        json_schema_extra={"pattern": PLACE_ID_PATTERN.pattern},
    ),
]


# =============================================================================
# TOOL 1: search_place_by_id
# =============================================================================
@mcp.tool()
def search_place_by_id(
    id: PlaceId,
    format: Annotated[
        str,
        Field(description="Return data format", json_schema_extra={"enum": ["json", "xml"]}),
    ] = "json",
) -> str:
    """Query historical place details by unique ID.

    With format "json" the record is rendered as a markdown report: names
    in each script, administrative type, time period with duration, and
    coordinates / present-day location.  With format "xml" the raw TGAZ
    XML is returned in a fenced code block.
    """
    return _run(SEARCH_PLACE_BY_ID, id=id, format=format)


# =============================================================================
# TOOL 2: search_places
# =============================================================================
@mcp.tool()
def search_places(
    name: Annotated[
        Optional[str],
        Field(description="Place name (supports Chinese, Pinyin, etc.)"),
    ] = None,
    year: Annotated[
        Optional[int],
        Field(
            description=f"Historical year (range: {MIN_YEAR} to {MAX_YEAR})",
            json_schema_extra={"minimum": MIN_YEAR, "maximum": MAX_YEAR},
        ),
    ] = None,
    feature_type: Annotated[
        Optional[str],
        Field(description="Administrative level type (e.g., zhou, xian, fu)"),
    ] = None,
    parent: Annotated[
        Optional[str],
        Field(description="Parent place or administrative division"),
    ] = None,
    source: Annotated[
        Optional[str],
        Field(description="Data source (e.g., CHGIS, RAS)", json_schema_extra={"enum": list(SOURCES)}),
    ] = None,
    format: Annotated[
        str,
        Field(description="Return data format", json_schema_extra={"enum": ["json", "xml", "html"]}),
    ] = "json",
) -> str:
    """Search places by name, year, administrative level, etc.

    At least one of name, year, feature_type, parent or source is required.
    Results come back in the order the gazetteer returns them, one numbered
    entry per place with its ID, pinyin, years, type, parent unit and a
    detail link.
    """
    return _run(
        SEARCH_PLACES,
        name=name,
        year=year,
        feature_type=feature_type,
        parent=parent,
        source=source,
        format=format,
    )


# =============================================================================
# TOOL 3: get_place_historical_context
# =============================================================================
@mcp.tool()
def get_place_historical_context(id: PlaceId) -> str:
    """Get historical context and hierarchical relationships of a place.

    Reports historical names, the time period, the parent administrative
    units the place belonged to (with periods), and its subordinate units.
    """
    return _run(GET_PLACE_HISTORICAL_CONTEXT, id=id)


if __name__ == "__main__":
    mcp.run()
