"""
Tests unitaires pour PlannedFileSystem.
"""

from pathlib import Path

import pytest

from media_scraper.core.value_objects import PlanAction, PlanActionType, ReconciliationPlan
from media_scraper.services.planned_fs import PlannedFileSystem
from tests.fixtures.memory_fs import MemoryFileSystem

INBOX = Path("/media/Inbox")
SHOW_DIR = Path("/media/TV/Show")
SEASON_DIR = SHOW_DIR / "Season 01"


@pytest.fixture
def base() -> MemoryFileSystem:
    fs = MemoryFileSystem()
    fs.add_file(INBOX / "Show.S01E01.mkv", b"video")
    fs.add_file(INBOX / "notes.txt", "hello")
    fs.add_dir("/media/TV")
    return fs


@pytest.fixture
def view(base: MemoryFileSystem) -> PlannedFileSystem:
    return PlannedFileSystem(base)


def _episode_plan() -> ReconciliationPlan:
    plan = ReconciliationPlan()
    plan.add(PlanAction(type=PlanActionType.CREATE_DIR, destination=SHOW_DIR))
    plan.add(PlanAction(type=PlanActionType.CREATE_DIR, destination=SEASON_DIR))
    plan.add(
        PlanAction(
            type=PlanActionType.MOVE,
            source=INBOX / "Show.S01E01.mkv",
            destination=SEASON_DIR / "Show - S01E01.mkv",
        )
    )
    plan.add(PlanAction(type=PlanActionType.CREATE_NFO, destination=SHOW_DIR / "tvshow.nfo", content="<tvshow/>"))
    plan.add(PlanAction(type=PlanActionType.DOWNLOAD_POSTER, destination=SHOW_DIR / "poster.jpg", url="u"))
    return plan


class TestApply:
    def test_plan_effects_are_visible(self, view: PlannedFileSystem) -> None:
        view.apply(_episode_plan())

        assert view.is_dir(SEASON_DIR)
        assert view.is_file(SEASON_DIR / "Show - S01E01.mkv")
        assert not view.exists(INBOX / "Show.S01E01.mkv")
        assert view.read_text(SHOW_DIR / "tvshow.nfo") == "<tvshow/>"
        assert view.get_size(SHOW_DIR / "poster.jpg") == 0
        # un fichier deplace garde le contenu de son origine
        assert view.get_size(SEASON_DIR / "Show - S01E01.mkv") == 5

    def test_base_is_never_modified(self, base: MemoryFileSystem, view: PlannedFileSystem) -> None:
        view.apply(_episode_plan())
        view.delete(INBOX / "notes.txt")

        assert base.mutations() == []
        assert INBOX / "Show.S01E01.mkv" in base.files
        assert INBOX / "notes.txt" in base.files

    def test_list_dir_merges_base_and_overlay(self, view: PlannedFileSystem) -> None:
        view.apply(_episode_plan())

        assert view.list_dir(INBOX) == [INBOX / "notes.txt"]
        assert view.list_dir(SHOW_DIR) == [SEASON_DIR, SHOW_DIR / "poster.jpg", SHOW_DIR / "tvshow.nfo"]
        assert view.list_dir(Path("/media/TV")) == [SHOW_DIR]


class TestMutations:
    def test_moving_a_missing_file_fails(self, view: PlannedFileSystem) -> None:
        view.apply(_episode_plan())
        with pytest.raises(FileNotFoundError):
            view.move(INBOX / "Show.S01E01.mkv", INBOX / "again.mkv")

    def test_second_move_keeps_origin(self, view: PlannedFileSystem) -> None:
        view.make_dir(INBOX / "sub")
        view.move(INBOX / "notes.txt", INBOX / "sub" / "a.txt")
        view.move(INBOX / "sub" / "a.txt", INBOX / "sub" / "b.txt")

        assert view.read_text(INBOX / "sub" / "b.txt") == "hello"
        assert not view.exists(INBOX / "sub" / "a.txt")

    def test_remove_dir_refuses_non_empty(self, view: PlannedFileSystem) -> None:
        view.apply(_episode_plan())
        with pytest.raises(OSError):
            view.remove_dir(SEASON_DIR)

        view.delete(SEASON_DIR / "Show - S01E01.mkv")
        view.remove_dir(SEASON_DIR)
        assert not view.is_dir(SEASON_DIR)

    def test_rewrite_after_delete(self, view: PlannedFileSystem) -> None:
        view.delete(INBOX / "notes.txt")
        assert view.list_dir(INBOX) == [INBOX / "Show.S01E01.mkv"]

        view.write_text(INBOX / "notes.txt", "new")
        assert view.read_text(INBOX / "notes.txt") == "new"
