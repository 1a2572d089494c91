from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Hashable, List, Optional, Tuple
from urllib.parse import quote


class LocationStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"

    def toggled(self) -> "Theme":
        return Theme.DARK if self is Theme.LIGHT else Theme.LIGHT


class ResultTab(str, Enum):
    SUMMARY = "summary"
    MAP = "map"


@dataclass(frozen=True)
class Location:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class ReviewSnippet:
    uri: str
    title: str
    text: str = ""


@dataclass(frozen=True)
class MapsSource:
    uri: str
    title: str
    review_snippets: Tuple[ReviewSnippet, ...] = ()


@dataclass(frozen=True)
class WebSource:
    uri: str
    title: str


@dataclass(frozen=True)
class Citation:
    """One grounding chunk: a maps place reference or a web reference."""
    maps: Optional[MapsSource] = None
    web: Optional[WebSource] = None


@dataclass
class SearchResult:
    text: str
    citations: List[Citation] = field(default_factory=list)

    @property
    def primary_map_title(self) -> Optional[str]:
        """Title of the first citation carrying a maps reference, in response order."""
        for c in self.citations:
            if c.maps is not None and c.maps.title:
                return c.maps.title
        return None

    @property
    def has_map(self) -> bool:
        return self.primary_map_title is not None


@dataclass(frozen=True)
class TranscriptSegment:
    transcript: str
    is_final: bool


def valid_map_sources(citations: List[Citation]) -> List[MapsSource]:
    return [c.maps for c in citations if c.maps is not None and c.maps.uri and c.maps.title]


def web_sources(citations: List[Citation]) -> List[WebSource]:
    return [c.web for c in citations if c.web is not None and c.web.uri]


def initial_tab(result_key: Hashable) -> ResultTab:
    """View selected when a result is first shown.

    Every new result identity starts on the summary; the key only exists so
    callers can tell a new result apart from a re-render of the same one.
    """
    return ResultTab.SUMMARY


def map_url(place_title: str) -> str:
    return f"https://maps.google.com/maps?q={quote(place_title, safe='')}&z=15"


def embed_map_url(place_title: str) -> str:
    """Embeddable Google Maps view centred on `place_title`."""
    return f"https://maps.google.com/maps?q={quote(place_title, safe='')}&output=embed&z=15"
