"""YAML source-list loader.

# ─── SOURCE CONFIGURATION ─────────────────────────────────────────────
#
# The feeds to harvest are listed in config/sources.yaml:
#
#   sources:
#     - name: BBC
#       feed_url: http://feeds.bbci.co.uk/news/rss.xml
#
# When the file does not exist the built-in DEFAULT_SOURCES are used, so a
# fresh checkout can run an ingestion without any config file.  Order in the
# file is the order sources are harvested in.
# ──────────────────────────────────────────────────────────────────────
"""

from pathlib import Path

import yaml
from pydantic import ValidationError

from newsrag.models.document import NewsSource
from newsrag.utils.errors import ConfigurationError

DEFAULT_SOURCES: tuple[NewsSource, ...] = (
    NewsSource(name="BBC", feed_url="http://feeds.bbci.co.uk/news/rss.xml"),
    NewsSource(name="CNN", feed_url="http://rss.cnn.com/rss/edition.rss"),
    NewsSource(name="TechCrunch", feed_url="https://techcrunch.com/feed/"),
    NewsSource(
        name="NYTimes",
        feed_url="https://rss.nytimes.com/services/xml/rss/nyt/HomePage.xml",
    ),
)


def load_sources(path: str = "config/sources.yaml") -> list[NewsSource]:
    """Load the list of feed sources from a YAML file.

    Args:
        path: Path to the YAML source list.

    Returns:
        Sources in file order, or the defaults when the file is missing.

    Raises:
        ConfigurationError: If the file exists but is not a valid source list.
    """
    config_path = Path(path)
    if not config_path.exists():
        return list(DEFAULT_SOURCES)

    with open(config_path, encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict) or not isinstance(raw.get("sources"), list):
        raise ConfigurationError(message=f"{path}: expected a top-level 'sources' list")

    sources: list[NewsSource] = []
    for idx, entry in enumerate(raw["sources"]):
        if not isinstance(entry, dict):
            raise ConfigurationError(message=f"{path}: source #{idx} is not a mapping")
        try:
            sources.append(NewsSource(**entry))
        except ValidationError as exc:
            raise ConfigurationError(message=f"{path}: invalid source #{idx}: {exc}") from exc
    return sources
