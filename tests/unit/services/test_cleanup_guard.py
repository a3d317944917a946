"""
Tests unitaires pour CleanupGuard.
"""

from media_scraper.config import MediaPaths
from media_scraper.services.cleanup import CleanupGuard, CleanupReason
from tests.fixtures.memory_fs import MemoryFileSystem


class TestCleanupSourceDir:
    def test_protected_root_makes_no_filesystem_call(
        self, cleanup_guard: CleanupGuard, memory_fs: MemoryFileSystem, media_paths: MediaPaths
    ) -> None:
        result = cleanup_guard.cleanup_source_dir(media_paths.inbox)

        assert result.reason == CleanupReason.PROTECTED
        assert not result.deleted
        assert memory_fs.calls == []

    def test_trailing_slash_is_still_protected(
        self, cleanup_guard: CleanupGuard, memory_fs: MemoryFileSystem
    ) -> None:
        result = cleanup_guard.cleanup_source_dir("/media/TV/")
        assert result.reason == CleanupReason.PROTECTED
        assert memory_fs.calls == []

    def test_empty_directory_is_deleted(
        self, cleanup_guard: CleanupGuard, memory_fs: MemoryFileSystem, media_paths: MediaPaths
    ) -> None:
        folder = memory_fs.add_dir(media_paths.inbox / "Show.Pack")

        result = cleanup_guard.cleanup_source_dir(folder)

        assert result.deleted
        assert result.reason == CleanupReason.DELETED
        assert folder not in memory_fs.dirs

    def test_directory_with_video_is_kept(
        self, cleanup_guard: CleanupGuard, memory_fs: MemoryFileSystem, media_paths: MediaPaths
    ) -> None:
        memory_fs.add_file(media_paths.inbox / "Pack" / "Show.S01E02.MKV")
        memory_fs.add_file(media_paths.inbox / "Pack" / "info.nfo", "x")

        result = cleanup_guard.cleanup_source_dir(media_paths.inbox / "Pack")

        assert result.reason == CleanupReason.HAS_VIDEO
        assert not result.deleted

    def test_directory_with_other_files_is_kept(
        self, cleanup_guard: CleanupGuard, memory_fs: MemoryFileSystem, media_paths: MediaPaths
    ) -> None:
        memory_fs.add_file(media_paths.inbox / "Pack" / "readme.txt", "x")

        result = cleanup_guard.cleanup_source_dir(media_paths.inbox / "Pack")

        assert result.reason == CleanupReason.NOT_EMPTY
        assert (media_paths.inbox / "Pack") in memory_fs.dirs

    def test_io_error_is_reported_not_raised(
        self, cleanup_guard: CleanupGuard, memory_fs: MemoryFileSystem, media_paths: MediaPaths
    ) -> None:
        folder = memory_fs.add_dir(media_paths.inbox / "Locked")
        memory_fs.fail_on.add(folder)

        result = cleanup_guard.cleanup_source_dir(folder)

        assert result.reason == CleanupReason.ERROR
        assert not result.deleted

    def test_missing_directory_is_error(self, cleanup_guard: CleanupGuard, media_paths: MediaPaths) -> None:
        result = cleanup_guard.cleanup_source_dir(media_paths.inbox / "gone")
        assert result.reason == CleanupReason.ERROR
