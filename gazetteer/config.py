# =============================================================================
# gazetteer/config.py  —  Process-wide configuration
# =============================================================================
#
# The upstream base URL is the only setting the tools depend on.  It is read
# once from the environment (main.py loads .env first) and then passed by
# value into the QueryBuilder, so nothing reads os.environ mid-request.
#
#   CHGIS_BASE_URL   base of the TGAZ API  (default: the Fudan host)
#   CHGIS_LOG_LEVEL  logging level name    (default: INFO)
# =============================================================================

from dataclasses import dataclass
import os

DEFAULT_BASE_URL = "http://tgaz.fudan.edu.cn/tgaz"
DEFAULT_LOG_LEVEL = "INFO"

SERVER_NAME = "chgis-gazetteer-server"
SERVER_VERSION = "1.0.0"


@dataclass(frozen=True)
class Settings:
    """Immutable settings for the lifetime of the process."""

    base_url: str = DEFAULT_BASE_URL
    log_level: str = DEFAULT_LOG_LEVEL


def load_settings(environ=None) -> Settings:
    """Build Settings from environment variables.

    Args:
        environ: Mapping to read from (defaults to os.environ).  Tests pass
                 a plain dict.
    """
    env = os.environ if environ is None else environ

    base_url = env.get("CHGIS_BASE_URL", "").strip() or DEFAULT_BASE_URL
    log_level = env.get("CHGIS_LOG_LEVEL", "").strip().upper() or DEFAULT_LOG_LEVEL

    return Settings(base_url=base_url.rstrip("/"), log_level=log_level)
