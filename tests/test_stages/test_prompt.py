"""Tests for prompt stage."""

from unittest.mock import patch

import pytest

from cue_split.config import SplitterConfig
from cue_split.manifest import RunManifest
from cue_split.models import ResolvedPaths, Stage, StageStatus
from cue_split.stages.prompt import run


@pytest.fixture
def paths(tmp_path):
    (tmp_path / "album.cue").write_text('FILE "album.ape" WAVE\n')
    (tmp_path / "album.ape").write_bytes(b"MAC ")
    return ResolvedPaths(
        cue_file=tmp_path / "album.cue",
        audio_file=tmp_path / "album.ape",
        root_dir=tmp_path,
    )


@pytest.fixture
def config():
    return SplitterConfig(_env_file=None)


@patch("cue_split.stages.prompt._stdin_is_interactive", return_value=True)
class TestInteractive:
    @pytest.mark.parametrize("answer", ["y", "Y"])
    @patch("cue_split.stages.prompt.click.getchar")
    def test_yes_deletes_source(self, mock_getchar, mock_tty, answer, paths, config, capsys):
        mock_getchar.return_value = answer
        manifest = RunManifest(paths)
        assert run(paths, config, manifest) is True
        assert not paths.audio_file.exists()
        assert "Delete source file album.ape? [y/N]" in capsys.readouterr().out
        assert manifest.status(Stage.PROMPT) == StageStatus.COMPLETED

    @pytest.mark.parametrize("answer", ["n", "N", "\r", " ", "q"])
    @patch("cue_split.stages.prompt.click.getchar")
    def test_anything_else_keeps_source(self, mock_getchar, mock_tty, answer, paths, config):
        mock_getchar.return_value = answer
        assert run(paths, config, RunManifest(paths)) is False
        assert paths.audio_file.exists()

    @patch("cue_split.stages.prompt.click.getchar", side_effect=EOFError)
    def test_eof_keeps_source(self, mock_getchar, mock_tty, paths, config):
        assert run(paths, config, RunManifest(paths)) is False
        assert paths.audio_file.exists()

    @patch("cue_split.stages.prompt.click.getchar")
    def test_no_prompt_flag_skips(self, mock_getchar, mock_tty, paths):
        config = SplitterConfig(_env_file=None, no_prompt=True)
        manifest = RunManifest(paths)
        assert run(paths, config, manifest) is False
        mock_getchar.assert_not_called()
        assert manifest.status(Stage.PROMPT) == StageStatus.SKIPPED


@patch("cue_split.stages.prompt.click.getchar")
def test_non_interactive_defaults_to_no(mock_getchar, paths, config):
    with patch("cue_split.stages.prompt._stdin_is_interactive", return_value=False):
        assert run(paths, config, RunManifest(paths)) is False
    mock_getchar.assert_not_called()
    assert paths.audio_file.exists()
