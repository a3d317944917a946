"""
Tests unitaires pour Settings et MediaPaths.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from media_scraper.config import MediaPaths, Settings


@pytest.fixture
def paths() -> MediaPaths:
    return MediaPaths(inbox=Path("/media/Inbox"), tv=Path("/media/TV"), movies=Path("/media/Movies"))


class TestMediaPaths:
    @pytest.mark.parametrize(
        "path",
        ["/media/Inbox", "/media/Inbox/", "/media/TV", "/media/Movies//", Path("/media/TV")],
    )
    def test_roots_are_protected(self, paths: MediaPaths, path) -> None:
        assert paths.is_protected(path)

    @pytest.mark.parametrize("path", ["/media/Inbox/Show", "/media", "/", "/media/TV2"])
    def test_other_paths_are_not_protected(self, paths: MediaPaths, path: str) -> None:
        assert not paths.is_protected(path)

    def test_library_membership(self, paths: MediaPaths) -> None:
        assert paths.is_under_tv("/media/TV/Show/Season 01")
        assert paths.is_under_movies(Path("/media/Movies/Dune (2021)"))
        assert paths.is_in_library("/media/TV/Show")
        assert not paths.is_in_library("/media/Inbox/Show")
        assert not paths.is_under_tv("/media/TVShows/x")


class TestSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.chdir(tmp_path)
        settings = Settings(_env_file=None)

        assert settings.language == "zh-CN"
        assert settings.nfo_generator == "media-scraper-web"
        assert settings.batch_delay_seconds == pytest.approx(0.3)
        assert settings.task_retention == 50
        assert not settings.tmdb_enabled
        assert not settings.dify_enabled

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MEDIA_SCRAPER_TV_DIR", "/srv/TV")
        monkeypatch.setenv("MEDIA_SCRAPER_TMDB_API_KEY", "key")
        monkeypatch.setenv("MEDIA_SCRAPER_BATCH_DELAY_SECONDS", "0")

        settings = Settings(_env_file=None)

        assert settings.tv_dir == Path("/srv/TV")
        assert settings.tmdb_enabled
        assert settings.batch_delay_seconds == 0
        assert settings.media_paths.tv == Path("/srv/TV")

    def test_home_is_expanded(self) -> None:
        settings = Settings(_env_file=None, inbox_dir="~/Inbox")
        assert settings.inbox_dir == Path.home() / "Inbox"

    def test_negative_delay_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, batch_delay_seconds=-1)
