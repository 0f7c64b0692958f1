# =============================================================================
# gazetteer/query.py  —  Query Builder
# =============================================================================
#
# Maps validated queries onto the TGAZ URL dialect:
#
#   by id:       {base}/placename/{format}/{id}
#   search:      {base}/placename?n=..&yr=..&ftyp=..&p=..&src=..&fmt=..
#   historical:  {base}/placename/xml/{id}
#
# Search keys are emitted in that fixed order (absent filters emit nothing,
# fmt is always last) so the same query always produces the same URL.
# =============================================================================

from dataclasses import dataclass
from urllib.parse import urlencode

from gazetteer.models import (
    ByIdQuery,
    ContextQuery,
    OutputFormat,
    SearchQuery,
    UpstreamRequest,
)

BY_ID_TIMEOUT = 10.0
SEARCH_TIMEOUT = 15.0
CONTEXT_TIMEOUT = 10.0


@dataclass(frozen=True)
class QueryBuilder:
    """Builds UpstreamRequests against one fixed base URL."""

    base_url: str

    def place_by_id(self, query: ByIdQuery) -> UpstreamRequest:
        return UpstreamRequest(
            url=f"{self.base_url}/placename/{query.format.value}/{query.place_id}",
            accept=query.format.accept,
            timeout=BY_ID_TIMEOUT,
        )

    def search(self, query: SearchQuery) -> UpstreamRequest:
        filters = query.filters
        params = []
        if filters.name is not None:
            params.append(("n", filters.name))
        if filters.year is not None:
            params.append(("yr", str(filters.year)))
        if filters.feature_type is not None:
            params.append(("ftyp", filters.feature_type))
        if filters.parent is not None:
            params.append(("p", filters.parent))
        if filters.source is not None:
            params.append(("src", filters.source))
        params.append(("fmt", query.format.value))

        return UpstreamRequest(
            url=f"{self.base_url}/placename?{urlencode(params)}",
            accept=query.format.accept,
            timeout=SEARCH_TIMEOUT,
        )

    def historical_context(self, query: ContextQuery) -> UpstreamRequest:
        # No format choice for this tool: the extractor only reads XML.
        return UpstreamRequest(
            url=f"{self.base_url}/placename/xml/{query.place_id}",
            accept=OutputFormat.XML.accept,
            timeout=CONTEXT_TIMEOUT,
        )
