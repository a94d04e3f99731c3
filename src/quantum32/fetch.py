# --- TRADEMARK NOTICE ---
# Lightcap (EUIPO. Reg. 019172085) — Contact: alpay@lightcap.ai
# Do not remove this notice from source distributions.

"""Wikipedia plain-text retrieval for document analysis."""

from __future__ import annotations

from typing import Any, Optional

import requests

from .config import FetchConfig
from .errors import DocumentNotFoundError, FetchError
from .logging import configure_logging
from .model import Document

LOGGER = configure_logging(logger_name=__name__)

# Wikipedia API configuration
WIKIPEDIA_API_TEMPLATE = "https://{language}.wikipedia.org/w/api.php"
MISSING_PAGE_ID = "-1"


class WikipediaFetcher:
    """Fetch the plain-text extract of a Wikipedia article."""

    def __init__(
        self,
        config: FetchConfig | None = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config or FetchConfig()
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": self.config.user_agent})

    def fetch_text(self, title: str, language: Optional[str] = None) -> str:
        """Return the article text for ``title``.

        Raises :class:`DocumentNotFoundError` when the page does not exist and
        :class:`FetchError` for transport or payload failures.
        """
        language = language or self.config.language
        url = WIKIPEDIA_API_TEMPLATE.format(language=language)
        params = {
            "action": "query",
            "format": "json",
            "titles": title,
            "prop": "extracts",
            "explaintext": "true",
            "exsectionformat": "plain",
        }

        try:
            response = self.session.get(url, params=params, timeout=self.config.timeout)
            response.raise_for_status()
            data: Any = response.json()
        except requests.RequestException as exc:
            LOGGER.error("Wikipedia request failed for '%s': %s", title, exc)
            raise FetchError(f"Could not fetch {title!r}: {exc}") from exc
        except ValueError as exc:
            LOGGER.error("Wikipedia returned invalid JSON for '%s'", title)
            raise FetchError(f"Invalid response for {title!r}") from exc

        pages = data.get("query", {}).get("pages") if isinstance(data, dict) else None
        if not pages:
            raise FetchError(f"Unexpected response for {title!r}: no pages")

        page_id, page = next(iter(pages.items()))
        if page_id == MISSING_PAGE_ID or "missing" in page:
            LOGGER.warning("No Wikipedia page found for '%s' (%s)", title, language)
            raise DocumentNotFoundError(title, language)

        text = page.get("extract") or ""
        LOGGER.info("Fetched '%s' (%d characters)", title, len(text))
        return text

    def fetch_document(self, title: str, language: Optional[str] = None) -> Document:
        return Document(title=title, raw_text=self.fetch_text(title, language))


def fetch_document(
    title: str,
    language: Optional[str] = None,
    config: FetchConfig | None = None,
) -> Document:
    """Fetch ``title`` with a one-off :class:`WikipediaFetcher`."""
    return WikipediaFetcher(config).fetch_document(title, language)
