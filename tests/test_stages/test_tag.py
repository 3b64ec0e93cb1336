"""Tests for tag stage."""

from unittest.mock import patch

import pytest

from cue_split.config import SplitterConfig
from cue_split.errors import ExternalToolError, StageError
from cue_split.manifest import RunManifest
from cue_split.models import ResolvedPaths, RunConfig, Stage, StageStatus
from cue_split.stages.tag import collect_tracks, run


class TestTagStage:
    def _setup(self, tmp_path, files=()):
        (tmp_path / "album.cue").write_text('FILE "album.flac" WAVE\n')
        (tmp_path / "album.flac").write_bytes(b"fLaC")
        for name in files:
            (tmp_path / name).write_bytes(b"fLaC")
        paths = ResolvedPaths(
            cue_file=tmp_path / "album.cue",
            audio_file=tmp_path / "album.flac",
            root_dir=tmp_path,
        )
        run_config = RunConfig(target_dir=tmp_path)
        return paths, run_config, SplitterConfig(_env_file=None), RunManifest(paths)

    def test_collect_tracks_natural_order(self, tmp_path):
        paths, *_ = self._setup(
            tmp_path,
            files=["10. A - Ten.flac", "2. A - Two.flac", "1. A - One.flac", "cover.jpg"],
        )
        assert [p.name for p in collect_tracks(paths)] == [
            "1. A - One.flac",
            "2. A - Two.flac",
            "10. A - Ten.flac",
        ]

    @patch("cue_split.stages.tag.copy_cue_tags")
    def test_tags_all_tracks(self, mock_tag, tmp_path):
        paths, run_config, config, manifest = self._setup(
            tmp_path, files=["01. A - One.flac", "02. A - Two.flac"]
        )
        run(paths=paths, run_config=run_config, config=config, manifest=manifest)

        args = mock_tag.call_args.args
        assert args[1] == paths.cue_file
        assert [p.name for p in args[2]] == ["01. A - One.flac", "02. A - Two.flac"]
        assert manifest.status(Stage.TAG) == StageStatus.COMPLETED

    @patch("cue_split.stages.tag.copy_cue_tags")
    def test_no_tracks_is_an_error(self, mock_tag, tmp_path):
        paths, run_config, config, manifest = self._setup(tmp_path)
        with pytest.raises(StageError, match="No track files"):
            run(paths=paths, run_config=run_config, config=config, manifest=manifest)
        mock_tag.assert_not_called()
        assert manifest.status(Stage.TAG) == StageStatus.FAILED

    @patch("cue_split.stages.tag.copy_cue_tags")
    def test_cuetag_failure_is_fatal(self, mock_tag, tmp_path):
        mock_tag.side_effect = ExternalToolError("cuetag", 1, "metaflac: not a FLAC file")
        paths, run_config, config, manifest = self._setup(tmp_path, files=["1. A - One.flac"])
        with pytest.raises(ExternalToolError):
            run(paths=paths, run_config=run_config, config=config, manifest=manifest)
        assert manifest.status(Stage.TAG) == StageStatus.FAILED
