"""
Match entities.

Results of reconciling parsed evidence against the external catalog.
They are computed per request and never persisted.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class MatchCandidate:
    """A catalog entry proposed for manual or assisted disambiguation."""

    id: int
    name: str
    original_name: Optional[str] = None
    date: Optional[str] = None
    poster_path: Optional[str] = None
    overview: Optional[str] = None
    media_type: Optional[str] = None
    score: float = 0.0


@dataclass
class MatchResult:
    """
    Outcome of an auto-match.

    Attributes:
        matched: True only when the best candidate is unambiguous
        title: Title used for the search
        year: Year used for the search
        result: Best scored candidate (present even when ambiguous)
        candidates: Top candidates for manual choice
        ambiguous: True when the best candidate must not be auto-accepted
    """

    matched: bool
    title: str
    year: Optional[int] = None
    result: Optional[MatchCandidate] = None
    candidates: list[MatchCandidate] = field(default_factory=list)
    ambiguous: bool = False


@dataclass
class PathRecognition:
    """
    Best-effort identification returned by the AI path recognizer.

    Only ever used as additional evidence, never as an authoritative match.
    """

    path: str
    title: str
    media_type: str
    year: Optional[int] = None
    season: Optional[int] = None
    episode: Optional[int] = None
    imdb_id: Optional[str] = None
    tmdb_id: Optional[int] = None
    tmdb_name: Optional[str] = None
    confidence: float = 0.0
    reason: str = ""
