# =============================================================================
# gazetteer/http.py  —  The one outbound HTTP call per tool invocation
# =============================================================================
#
# A single GET with a bounded timeout.  No retry, no cache: a failure is
# reported as UpstreamError and the dispatcher decides what the caller sees.
# HTTP error responses keep their status code so a 404 can be told apart
# from everything else.
# =============================================================================

import codecs
import http.client
import logging
import urllib.error
import urllib.request

from gazetteer.errors import UpstreamError
from gazetteer.models import UpstreamRequest

logger = logging.getLogger(__name__)


def _charset(response) -> str:
    """Declared charset of the response, or utf-8 when missing or unknown."""
    charset = response.headers.get_content_charset()
    if not charset:
        return "utf-8"
    try:
        codecs.lookup(charset)
    except LookupError:
        logger.warning("Unknown charset %r from gazetteer, decoding as utf-8", charset)
        return "utf-8"
    return charset


def fetch_text(request: UpstreamRequest) -> str:
    """GET ``request.url`` and return the decoded body.

    Raises:
        UpstreamError: on an HTTP error status (``status`` set), a timeout,
            a connection failure or a truncated body (``status`` None).
    """
    logger.debug("GET %s (Accept: %s, timeout=%ss)", request.url, request.accept, request.timeout)

    req = urllib.request.Request(request.url, headers={"Accept": request.accept})
    try:
        with urllib.request.urlopen(req, timeout=request.timeout) as response:
            return response.read().decode(_charset(response), errors="replace")
    except urllib.error.HTTPError as e:
        logger.warning("Gazetteer returned HTTP %s for %s", e.code, request.url)
        raise UpstreamError(f"Request failed with status code {e.code}", status=e.code) from e
    except urllib.error.URLError as e:
        logger.warning("Gazetteer request to %s failed: %s", request.url, e.reason)
        raise UpstreamError(f"Request failed: {e.reason}") from e
    except (OSError, http.client.HTTPException) as e:  # timeouts, IncompleteRead
        logger.warning("Gazetteer request to %s failed: %s", request.url, e)
        raise UpstreamError(f"Request failed: {e}") from e
