# ============================================================================
# FILE: moodmusic/services/recommendation_service.py
# Mood-based recommendations: model completion -> candidates -> enrichment
# ============================================================================
import asyncio
import logging
import re
from dataclasses import dataclass
from typing import List, Union

from moodmusic.core.errors import LookupDegraded
from moodmusic.core.mistral_client import MistralClient
from moodmusic.schemas.recommendation import Recommendation
from moodmusic.services.artwork_service import ArtworkService
from moodmusic.services.video_search_service import VideoSearchService

logger = logging.getLogger(__name__)

SEPARATOR = "-"
SPACED_SEPARATOR = " - "
QUOTE_CHARS = "\"'“”‘’"
LIST_MARKER = re.compile(r"^\s*(?:\d+\s*[.)]|[*•-](?=\s))\s*")


@dataclass(frozen=True)
class Candidate:
    """A parsed, not yet enriched suggestion"""
    raw: str
    title: str
    artist: str
    spaced: bool = True


@dataclass(frozen=True)
class Enriched:
    candidate: Candidate
    link: str
    image: str

    def to_recommendation(self) -> Recommendation:
        return Recommendation(
            title=self.candidate.raw,
            song_title=self.candidate.title,
            artist=self.candidate.artist,
            link=self.link,
            image=self.image,
        )


@dataclass(frozen=True)
class LookupFailed:
    candidate: Candidate
    reason: str


EnrichmentOutcome = Union[Enriched, LookupFailed]


def build_prompt(mood: str, language: str, genre: str, count: int = 5) -> str:
    return (
        f"You are a music expert. Suggest exactly {count} diverse {language} {genre} "
        f"songs that match a {mood} mood. Reply with one song per line, "
        f'formatted as "Song Title - Artist Name", and nothing else.'
    )


def split_title_artist(line: str):
    if SPACED_SEPARATOR in line:
        title, artist = line.split(SPACED_SEPARATOR, 1)
    else:
        title, artist = line.split(SEPARATOR, 1)
    return title.strip().strip(QUOTE_CHARS).strip(), artist.strip().strip(QUOTE_CHARS).strip()


def parse_candidates(completion: str) -> List[Candidate]:
    """
    Turn free-text model output into candidates.

    Every line containing a separator becomes a candidate; other lines are
    dropped without error, so an empty list is a valid result.
    """
    candidates = []
    for line in completion.splitlines():
        if SEPARATOR not in line:
            continue
        line = LIST_MARKER.sub("", line.strip())
        line = line.strip().strip(QUOTE_CHARS).strip()
        if SEPARATOR not in line:
            continue
        title, artist = split_title_artist(line)
        if not title:
            continue
        candidates.append(Candidate(raw=line, title=title, artist=artist, spaced=SPACED_SEPARATOR in line))
    return candidates


def cap_results(results: List[Enriched], limit: int) -> List[Enriched]:
    """
    Keep at most ``limit`` results in their original order.

    Results parsed from a spaced " - " separator win over ones that only had a
    bare hyphen, e.g. an intro line mentioning "feel-good" songs.
    """
    if len(results) <= limit:
        return results
    ranked = sorted(range(len(results)), key=lambda i: (not results[i].candidate.spaced, i))
    keep = set(ranked[:limit])
    return [result for i, result in enumerate(results) if i in keep]


class RecommendationService:
    """Runs the recommendation pipeline for one request"""

    def __init__(
        self,
        llm_client: MistralClient,
        video_search: VideoSearchService,
        artwork: ArtworkService,
        count: int = 5,
    ):
        self.llm_client = llm_client
        self.video_search = video_search
        self.artwork = artwork
        self.count = count

    async def recommend(self, mood: str, language: str, genre: str) -> List[Recommendation]:
        """
        Ask the model for songs, then enrich every candidate concurrently.

        A failed model call raises UpstreamUnavailable. Candidates whose video
        lookup fails are dropped; at most ``count`` of the rest are returned.
        """
        prompt = build_prompt(mood, language, genre, self.count)
        completion = await self.llm_client.complete(prompt)

        candidates = parse_candidates(completion)
        if not candidates:
            logger.warning(f"No candidates parsed for mood={mood} language={language} genre={genre}")
            return []

        outcomes = await asyncio.gather(*(self.enrich(c) for c in candidates), return_exceptions=True)

        enriched = []
        for candidate, outcome in zip(candidates, outcomes):
            if isinstance(outcome, BaseException):
                logger.error(f"Enrichment of '{candidate.raw}' failed: {outcome!r}")
                continue
            if isinstance(outcome, Enriched):
                enriched.append(outcome)
            else:
                logger.info(f"Dropped '{outcome.candidate.raw}': {outcome.reason}")

        recommendations = [result.to_recommendation() for result in cap_results(enriched, self.count)]
        logger.info(f"Recommendations: {len(recommendations)}/{len(candidates)} candidates enriched")
        return recommendations

    async def enrich(self, candidate: Candidate) -> EnrichmentOutcome:
        link, image = await asyncio.gather(
            self._resolve_link(candidate),
            self.artwork.find_image(candidate.artist, candidate.title),
            return_exceptions=True,
        )
        if isinstance(link, BaseException):
            logger.error(f"Video lookup for '{candidate.raw}' raised {link!r}")
            return LookupFailed(candidate, f"video lookup error: {link}")
        if isinstance(link, LookupFailed):
            return link
        if isinstance(image, BaseException):
            logger.error(f"Artwork lookup for '{candidate.raw}' raised {image!r}")
            image = self.artwork.placeholder_url
        return Enriched(candidate=candidate, link=link, image=image)

    async def _resolve_link(self, candidate: Candidate) -> Union[str, LookupFailed]:
        try:
            link = await self.video_search.find_watch_url(candidate.raw)
        except LookupDegraded as e:
            return LookupFailed(candidate, str(e))
        if not link:
            return LookupFailed(candidate, "no video results")
        return link
