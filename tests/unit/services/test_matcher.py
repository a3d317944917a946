"""
Tests unitaires pour MatcherService et la formule de scoring.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from media_scraper.core.entities import PathRecognition
from media_scraper.core.ports.api_clients import CatalogCandidate, CatalogError
from media_scraper.core.ports.recognizer import IPathRecognizer
from media_scraper.core.value_objects import MediaKind
from media_scraper.services.matcher import MatcherService, calculate_score, is_ambiguous


def candidate(id: int, name: str, date: str = None, vote: float = 0.0, media_type: str = "tv") -> CatalogCandidate:
    return CatalogCandidate(id=id, name=name, date=date, vote_average=vote, media_type=media_type)


class TestScoring:
    def test_exact_title_and_year(self) -> None:
        assert calculate_score("Show", 2008, candidate(1, "show", "2008-01-20", 5.0)) == pytest.approx(0.9)

    def test_contained_title_and_adjacent_year(self) -> None:
        score = calculate_score("Show", 2008, candidate(1, "Show Returns", "2009-01-01"))
        assert score == pytest.approx(0.45)

    def test_vote_bonus_is_capped(self) -> None:
        assert calculate_score("X", None, candidate(1, "Other", vote=20.0)) == pytest.approx(0.2)

    def test_score_never_exceeds_one(self) -> None:
        assert calculate_score("Show", 2008, candidate(1, "Show", "2008", 10.0)) == pytest.approx(1.0)

    def test_year_ignored_when_unknown(self) -> None:
        assert calculate_score("Show", None, candidate(1, "Show", "2008")) == pytest.approx(0.5)

    @pytest.mark.parametrize(
        "scores,expected",
        [
            ([], True),
            ([0.49], True),
            ([0.5], False),
            ([0.9, 0.85], True),
            ([0.9, 0.79], False),
        ],
    )
    def test_is_ambiguous(self, scores: list[float], expected: bool) -> None:
        assert is_ambiguous(scores) is expected


@pytest.fixture
def matcher(fake_catalog: AsyncMock, parser) -> MatcherService:
    return MatcherService(fake_catalog, parser)


class TestSearch:
    @pytest.mark.asyncio
    async def test_search_by_kind(self, matcher: MatcherService, fake_catalog: AsyncMock) -> None:
        fake_catalog.search_shows.return_value = [candidate(1, "Show")]
        results = await matcher.search(MediaKind.TV, "Show", 2008)
        fake_catalog.search_shows.assert_awaited_once_with("Show", 2008)
        assert [r.id for r in results] == [1]

        await matcher.search(MediaKind.MOVIE, "Dune")
        fake_catalog.search_movies.assert_awaited_once_with("Dune", None)

    @pytest.mark.asyncio
    async def test_multi_search_filters_by_year(self, matcher: MatcherService, fake_catalog: AsyncMock) -> None:
        fake_catalog.search_multi.return_value = [
            candidate(1, "Dune", "2021-09-15", media_type="movie"),
            candidate(2, "Dune", "1984-12-14", media_type="movie"),
            candidate(3, "Dune", "2020-01-01", media_type="tv"),
            candidate(4, "Dune", None, media_type="tv"),
        ]
        results = await matcher.search(None, "Dune", 2021)
        assert [r.id for r in results] == [1, 3, 4]


class TestAutoMatch:
    @pytest.mark.asyncio
    async def test_clear_winner_is_matched(self, matcher: MatcherService, fake_catalog: AsyncMock) -> None:
        fake_catalog.search_shows.return_value = [
            candidate(2, "Show Something", "2001-01-01"),
            candidate(1, "Show", "2008-01-20", 8.0),
        ]

        result = await matcher.auto_match("/media/Inbox/Show.2008.S01E01.mkv", MediaKind.TV)

        assert result.matched
        assert not result.ambiguous
        assert result.title == "Show"
        assert result.year == 2008
        assert result.result.id == 1
        assert [c.id for c in result.candidates] == [1, 2]

    @pytest.mark.asyncio
    async def test_close_scores_are_ambiguous(self, matcher: MatcherService, fake_catalog: AsyncMock) -> None:
        fake_catalog.search_multi.return_value = [
            candidate(1, "Show", "2008-01-01"),
            candidate(2, "Show", "2008-06-01"),
        ]

        result = await matcher.auto_match("Show.2008.mkv")

        assert not result.matched
        assert result.ambiguous
        assert result.result is not None

    @pytest.mark.asyncio
    async def test_low_score_is_ambiguous(self, matcher: MatcherService, fake_catalog: AsyncMock) -> None:
        fake_catalog.search_movies.return_value = [candidate(1, "Something Else", media_type="movie")]
        result = await matcher.auto_match("Film.mkv", MediaKind.MOVIE)
        assert not result.matched
        assert result.ambiguous

    @pytest.mark.asyncio
    async def test_no_results(self, matcher: MatcherService) -> None:
        result = await matcher.auto_match("Unknown.Title.mkv", MediaKind.TV)
        assert not result.matched
        assert result.result is None
        assert result.candidates == []

    @pytest.mark.asyncio
    async def test_explicit_title_and_year_override_filename(
        self, matcher: MatcherService, fake_catalog: AsyncMock
    ) -> None:
        await matcher.auto_match("garbage.mkv", MediaKind.TV, title="Real", year=1999)
        fake_catalog.search_shows.assert_awaited_once_with("Real", 1999)

    @pytest.mark.asyncio
    async def test_candidates_are_limited(self, matcher: MatcherService, fake_catalog: AsyncMock) -> None:
        fake_catalog.search_shows.return_value = [candidate(i, f"Show {i}") for i in range(8)]
        result = await matcher.auto_match("Show.S01E01.mkv", MediaKind.TV)
        assert len(result.candidates) == 5

    @pytest.mark.asyncio
    async def test_missing_title_raises(self, matcher: MatcherService) -> None:
        with pytest.raises(ValueError):
            await matcher.auto_match("S01E01.mkv", MediaKind.TV)

    @pytest.mark.asyncio
    async def test_catalog_error_propagates(self, matcher: MatcherService, fake_catalog: AsyncMock) -> None:
        fake_catalog.search_shows.side_effect = CatalogError("down")
        with pytest.raises(CatalogError):
            await matcher.auto_match("Show.S01E01.mkv", MediaKind.TV)


class TestRecognize:
    @pytest.fixture
    def recognizer(self) -> MagicMock:
        mock = MagicMock(spec=IPathRecognizer)
        mock.enabled = True
        mock.recognize = AsyncMock()
        return mock

    @pytest.mark.asyncio
    async def test_without_recognizer(self, matcher: MatcherService) -> None:
        assert await matcher.recognize("/x") is None

    @pytest.mark.asyncio
    async def test_disabled_recognizer(self, fake_catalog, parser, recognizer: MagicMock) -> None:
        recognizer.enabled = False
        matcher = MatcherService(fake_catalog, parser, recognizer)
        assert await matcher.recognize("/x") is None
        recognizer.recognize.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_imdb_id_is_resolved(self, fake_catalog, parser, recognizer: MagicMock) -> None:
        recognizer.recognize.return_value = PathRecognition(
            path="/x", title="Breaking Bad", media_type="tv", imdb_id="tt0903747", confidence=0.9
        )
        fake_catalog.resolve_by_external_id.return_value = candidate(1396, "绝命毒师")
        matcher = MatcherService(fake_catalog, parser, recognizer)

        result = await matcher.recognize("/x")

        fake_catalog.resolve_by_external_id.assert_awaited_once_with("tt0903747", "tv")
        assert result.tmdb_id == 1396
        assert result.tmdb_name == "绝命毒师"

    @pytest.mark.asyncio
    async def test_resolution_failure_keeps_recognition(
        self, fake_catalog, parser, recognizer: MagicMock
    ) -> None:
        recognizer.recognize.return_value = PathRecognition(
            path="/x", title="Show", media_type="tv", imdb_id="tt1"
        )
        fake_catalog.resolve_by_external_id.side_effect = CatalogError("down")
        matcher = MatcherService(fake_catalog, parser, recognizer)

        result = await matcher.recognize("/x")

        assert result.title == "Show"
        assert result.tmdb_id is None
