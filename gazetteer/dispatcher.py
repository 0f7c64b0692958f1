# =============================================================================
# gazetteer/dispatcher.py  —  Tool Dispatcher
# =============================================================================
#
# Runs one tool call end to end:
#
#   validate → build request → fetch (one GET) → extract → render
#
# and is the single place where failures become the caller-facing error
# envelope:
#
#   unknown tool name                  → MethodNotFound
#   validation failure                 → InvalidParams   (no network call)
#   HTTP 404 on an id-addressed lookup → InvalidParams   "No place record found for ID .."
#   any other upstream/parse failure   → InternalError   "Tool execution failed: .."
#
# The fetch function is injected so tests (and any future transport) can
# replace the HTTP call without touching the pipeline.
# =============================================================================

import logging
from typing import Callable, Optional

from gazetteer.errors import (
    InternalError,
    InvalidParamsError,
    MethodNotFoundError,
    UpstreamError,
)
from gazetteer.extract import (
    extract_historical_context,
    extract_place_record,
    extract_search_results,
    parse_json_payload,
)
from gazetteer.http import fetch_text
from gazetteer.models import OutputFormat, UpstreamRequest
from gazetteer.query import QueryBuilder
from gazetteer.render import (
    render_historical_context,
    render_place_details,
    render_raw,
    render_search_results,
)
from gazetteer.validation import validate_by_id, validate_context_id, validate_search

logger = logging.getLogger(__name__)

Fetcher = Callable[[UpstreamRequest], str]

SEARCH_PLACE_BY_ID = "search_place_by_id"
SEARCH_PLACES = "search_places"
GET_PLACE_HISTORICAL_CONTEXT = "get_place_historical_context"


class ToolDispatcher:
    """Routes a tool name plus raw arguments to its pipeline."""

    def __init__(self, builder: QueryBuilder, fetch: Fetcher = fetch_text):
        self._builder = builder
        self._fetch = fetch
        self._handlers = {
            SEARCH_PLACE_BY_ID: self.search_place_by_id,
            SEARCH_PLACES: self.search_places,
            GET_PLACE_HISTORICAL_CONTEXT: self.get_place_historical_context,
        }

    @property
    def tool_names(self) -> list[str]:
        return list(self._handlers)

    def dispatch(self, tool_name: str, arguments: Optional[dict] = None) -> str:
        """Run ``tool_name`` and return the rendered report text.

        Raises:
            MethodNotFoundError: unknown tool.
            InvalidParamsError: bad arguments, or no record for the id.
            InternalError: transport, HTTP or payload failure.
        """
        handler = self._handlers.get(tool_name)
        if handler is None:
            raise MethodNotFoundError(f"Unknown tool: {tool_name}")
        if arguments is None:
            arguments = {}
        if not isinstance(arguments, dict):
            raise InvalidParamsError("Tool arguments must be an object")
        return handler(arguments)

    # -------------------------------------------------------------------------
    # Handlers
    # -------------------------------------------------------------------------
    def search_place_by_id(self, arguments: dict) -> str:
        query = validate_by_id(arguments.get("id"), arguments.get("format"))
        body = self._get(self._builder.place_by_id(query), not_found_id=query.place_id)

        if query.format is not OutputFormat.JSON:
            return render_raw("Place Details", query.format.value, body)

        payload = self._parse_json(body)
        return render_place_details(extract_place_record(payload, query.place_id))

    def search_places(self, arguments: dict) -> str:
        query = validate_search(
            name=arguments.get("name"),
            year=arguments.get("year"),
            feature_type=arguments.get("feature_type"),
            parent=arguments.get("parent"),
            source=arguments.get("source"),
            format=arguments.get("format"),
        )
        body = self._get(self._builder.search(query))

        if query.format is not OutputFormat.JSON:
            return render_raw("Search Results", query.format.value, body)

        payload = self._parse_json(body)
        return render_search_results(extract_search_results(payload))

    def get_place_historical_context(self, arguments: dict) -> str:
        query = validate_context_id(arguments.get("id"))
        body = self._get(self._builder.historical_context(query), not_found_id=query.place_id)
        return render_historical_context(extract_historical_context(body, query.place_id))

    # -------------------------------------------------------------------------
    # Failure mapping
    # -------------------------------------------------------------------------
    def _get(self, request: UpstreamRequest, not_found_id: Optional[str] = None) -> str:
        try:
            return self._fetch(request)
        except UpstreamError as e:
            if e.status == 404 and not_found_id is not None:
                raise InvalidParamsError(f"No place record found for ID {not_found_id}") from e
            raise InternalError(f"Tool execution failed: {e}") from e

    @staticmethod
    def _parse_json(body: str) -> dict:
        try:
            return parse_json_payload(body)
        except ValueError as e:
            logger.warning("Unparseable gazetteer payload: %s", e)
            raise InternalError(f"Tool execution failed: invalid JSON response ({e})") from e
