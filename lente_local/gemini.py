from __future__ import annotations
import logging
from typing import Any, Callable, Iterable, List, Optional

from google import genai
from google.genai import types

from .config import get_api_key, get_details_model, get_search_model
from .errors import ConfigurationError, GatewayError
from .i18n import tr
from .models import Citation, Location, MapsSource, ReviewSnippet, SearchResult, WebSource

logger = logging.getLogger(__name__)

DETAILS_PROMPT = (
    'Me conte alguns fatos interessantes, história ou detalhes únicos sobre "{topic}". '
    "Apresente de forma concisa e envolvente como markdown."
)


def build_search_config(location: Optional[Location]) -> types.GenerateContentConfig:
    """Maps-grounded generation config, biased towards `location` when given."""
    tool_config = None
    if location is not None:
        tool_config = types.ToolConfig(
            retrieval_config=types.RetrievalConfig(
                lat_lng=types.LatLng(latitude=location.latitude, longitude=location.longitude),
            ),
        )
    return types.GenerateContentConfig(
        tools=[types.Tool(google_maps=types.GoogleMaps())],
        tool_config=tool_config,
    )


def _as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _review_snippets(place_answer_sources: Any) -> tuple:
    snippets = []
    for source in _as_list(place_answer_sources):
        for s in _as_list(getattr(source, "review_snippets", None)):
            uri = getattr(s, "uri", None) or getattr(s, "google_maps_uri", None) or ""
            snippets.append(ReviewSnippet(
                uri=uri,
                title=getattr(s, "title", None) or "",
                text=getattr(s, "text", None) or "",
            ))
    return tuple(snippets)


def _to_citation(chunk: Any) -> Optional[Citation]:
    maps = getattr(chunk, "maps", None)
    web = getattr(chunk, "web", None)
    maps_source = None
    web_source = None
    if maps is not None:
        maps_source = MapsSource(
            uri=getattr(maps, "uri", None) or "",
            title=getattr(maps, "title", None) or "",
            review_snippets=_review_snippets(getattr(maps, "place_answer_sources", None)),
        )
    if web is not None:
        web_source = WebSource(
            uri=getattr(web, "uri", None) or "",
            title=getattr(web, "title", None) or "",
        )
    if maps_source is None and web_source is None:
        return None
    return Citation(maps=maps_source, web=web_source)


def extract_citations(response: Any) -> List[Citation]:
    """Grounding chunks of the first candidate, in response order."""
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return []
    metadata = getattr(candidates[0], "grounding_metadata", None)
    chunks: Iterable[Any] = getattr(metadata, "grounding_chunks", None) or []
    citations: List[Citation] = []
    for chunk in chunks:
        c = _to_citation(chunk)
        if c is not None:
            citations.append(c)
    return citations


def _default_client_factory(api_key: str) -> genai.Client:
    return genai.Client(api_key=api_key)


class GeminiGateway:
    """Stateless calls to the Gemini API.

    The API key is resolved on every call through `api_key_provider`, so a
    key added to the environment later is picked up without a restart.
    """

    def __init__(
        self,
        api_key_provider: Callable[[], Optional[str]] = get_api_key,
        client_factory: Optional[Callable[[str], Any]] = None,
        search_model: Optional[str] = None,
        details_model: Optional[str] = None,
    ):
        self.api_key_provider = api_key_provider
        self.client_factory = client_factory or _default_client_factory
        self.search_model = search_model or get_search_model()
        self.details_model = details_model or get_details_model()

    def _client(self, failure_message: str) -> Any:
        api_key = self.api_key_provider()
        if not api_key:
            message = tr("errors.missing_api_key")
            logger.error(message)
            raise ConfigurationError(message)
        try:
            return self.client_factory(api_key)
        except Exception as exc:
            logger.error("Could not create Gemini client: %s", exc, exc_info=True)
            raise GatewayError(failure_message) from exc

    def search_with_maps(self, query: str, location: Optional[Location] = None) -> SearchResult:
        failure = tr("errors.gateway_search")
        client = self._client(failure)
        try:
            response = client.models.generate_content(
                model=self.search_model,
                contents=query,
                config=build_search_config(location),
            )
        except Exception as exc:
            logger.error("Gemini API error: %s", exc, exc_info=True)
            raise GatewayError(failure) from exc

        citations = extract_citations(response)
        logger.info("Search for %r returned %d citation(s)", query, len(citations))
        return SearchResult(text=response.text or "", citations=citations)

    def get_additional_details(self, topic: str) -> str:
        failure = tr("errors.gateway_details")
        client = self._client(failure)
        try:
            response = client.models.generate_content(
                model=self.details_model,
                contents=DETAILS_PROMPT.format(topic=topic),
            )
        except Exception as exc:
            logger.error("Gemini API error (get_additional_details): %s", exc, exc_info=True)
            raise GatewayError(failure) from exc
        return response.text or ""
