"""Tests for workspace lifecycle helpers."""

from pathlib import Path

import pytest

from pydantic import ValidationError

from avsplit.core.errors import WorkspacePrepFailed
from avsplit.core.workspace import Workspace, clean_workspace, prepare_workspace


class TestWorkspace:
    def test_default_folders(self):
        ws = Workspace()
        assert ws.audio_path == Path("audio")
        assert ws.video_path == Path("video")

    def test_custom_root(self, tmp_path: Path):
        ws = Workspace(root=tmp_path, audio_dir="a", video_dir="v")
        assert ws.folders == [tmp_path / "a", tmp_path / "v"]

    def test_prepare_then_clean(self, tmp_path: Path):
        ws = Workspace(root=tmp_path / "run")
        prepare_workspace(ws)
        assert ws.audio_path.is_dir() and ws.video_path.is_dir()

        (ws.video_path / "old_chunk_000.mp4").write_bytes(b"old")
        clean_workspace(ws)
        assert not ws.audio_path.exists()
        assert not ws.video_path.exists()

    def test_clean_missing_folders_is_noop(self, tmp_path: Path):
        clean_workspace(Workspace(root=tmp_path / "never_created"))

    def test_clean_leaves_siblings(self, tmp_path: Path):
        ws = Workspace(root=tmp_path)
        prepare_workspace(ws)
        keep = tmp_path / "source"
        keep.mkdir()
        clean_workspace(ws)
        assert keep.exists()

    def test_prepare_failure(self, tmp_path: Path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        with pytest.raises(WorkspacePrepFailed, match="failed to create dir"):
            prepare_workspace(Workspace(root=blocker))

    def test_clean_failure(self, tmp_path: Path, monkeypatch):
        ws = Workspace(root=tmp_path)
        prepare_workspace(ws)

        def deny(path, *args, **kwargs):
            raise PermissionError(f"denied: {path}")

        monkeypatch.setattr("avsplit.core.workspace.shutil.rmtree", deny)
        with pytest.raises(WorkspacePrepFailed, match="failed to remove"):
            clean_workspace(ws)

    @pytest.mark.parametrize("folder", ["", ".", "..", "/tmp/audio", "a/b", "../audio"])
    @pytest.mark.parametrize("field", ["audio_dir", "video_dir"])
    def test_folder_must_be_single_name(self, tmp_path: Path, field: str, folder: str):
        folders = {"audio_dir": "audio", "video_dir": "video", field: folder}
        with pytest.raises(ValidationError, match="single folder name"):
            Workspace(root=tmp_path, **folders)

    def test_folders_must_differ(self, tmp_path: Path):
        with pytest.raises(ValidationError, match="must differ"):
            Workspace(root=tmp_path, audio_dir="media", video_dir="media")

    def test_clean_never_touches_root(self, tmp_path: Path):
        source = tmp_path / "source" / "IMG_8435.MOV"
        source.parent.mkdir()
        source.write_bytes(b"\x00")
        ws = Workspace(root=tmp_path)
        prepare_workspace(ws)
        clean_workspace(ws)
        assert source.exists()
