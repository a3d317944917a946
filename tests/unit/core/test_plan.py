"""
Tests unitaires pour ReconciliationPlan et ParsedInfo.
"""

from pathlib import Path

from media_scraper.core.value_objects import (
    MediaKind,
    ParsedInfo,
    PlanAction,
    PlanActionType,
    ReconciliationPlan,
)


class TestReconciliationPlan:
    def test_summary_follows_actions(self) -> None:
        plan = ReconciliationPlan()
        plan.add(PlanAction(type=PlanActionType.CREATE_DIR, destination=Path("/tv/Show")))
        plan.add(PlanAction(type=PlanActionType.MOVE, source=Path("/in/a.mkv"), destination=Path("/tv/Show/a.mkv")))
        plan.add(PlanAction(type=PlanActionType.CREATE_NFO, destination=Path("/tv/Show/tvshow.nfo"), content="<x/>"))
        plan.add(
            PlanAction(
                type=PlanActionType.CREATE_NFO,
                destination=Path("/tv/Show/a.nfo"),
                will_overwrite=True,
                content="<x/>",
            )
        )
        plan.add(PlanAction(type=PlanActionType.DOWNLOAD_POSTER, destination=Path("/tv/Show/poster.jpg"), url="u"))

        summary = plan.impact_summary
        assert summary.files_moving == 1
        assert summary.nfo_creating == 1
        assert summary.nfo_overwriting == 1
        assert summary.posters_downloading == 1
        assert summary.directories_creating == [Path("/tv/Show")]

    def test_to_dict_has_no_nfo_content(self) -> None:
        plan = ReconciliationPlan()
        plan.add(PlanAction(type=PlanActionType.CREATE_NFO, destination=Path("/tv/Show/tvshow.nfo"), content="<x/>"))

        data = plan.to_dict()

        assert data["actions"] == [
            {
                "type": "create-nfo",
                "source": None,
                "destination": "/tv/Show/tvshow.nfo",
                "will_overwrite": False,
            }
        ]
        assert data["impact_summary"]["nfo_creating"] == 1
        assert data["impact_summary"]["directories_creating"] == []


class TestParsedInfo:
    def test_kind_from_episode(self) -> None:
        assert ParsedInfo(title="Show", season=1, episode=2).kind == MediaKind.TV
        assert ParsedInfo(title="Show", episode=2).kind == MediaKind.TV
        assert ParsedInfo(title="Film", year=2021).kind == MediaKind.MOVIE
