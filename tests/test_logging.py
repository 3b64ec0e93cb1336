"""Tests for loguru-based splitter logging."""

from loguru import logger

from cue_split.config import SplitterConfig


class TestSetupLogging:
    def setup_method(self):
        logger.remove()

    def teardown_method(self):
        logger.remove()

    def test_no_file_sink_by_default(self, tmp_path, monkeypatch):
        monkeypatch.delenv("CUE_SPLIT_LOG_DIR", raising=False)
        monkeypatch.chdir(tmp_path)
        config = SplitterConfig(_env_file=None)
        config.setup_logging()
        logger.info("stderr only")
        assert list(tmp_path.iterdir()) == []

    def test_setup_creates_log_dir(self, tmp_path):
        log_dir = tmp_path / "logs"
        config = SplitterConfig(_env_file=None, log_dir=log_dir)
        config.setup_logging()
        assert log_dir.exists()

    def test_setup_adds_file_sink(self, tmp_path):
        log_dir = tmp_path / "logs"
        config = SplitterConfig(_env_file=None, log_dir=log_dir)
        config.setup_logging()
        logger.bind(stage="test").info("hello from test")
        log_file = log_dir / "cue-split.log"
        assert log_file.exists()
        assert "hello from test" in log_file.read_text()

    def test_stage_context_in_output(self, tmp_path):
        log_dir = tmp_path / "logs"
        config = SplitterConfig(_env_file=None, log_dir=log_dir)
        config.setup_logging()
        logger.bind(stage="split").info("splitting")
        content = (log_dir / "cue-split.log").read_text()
        assert "| split" in content

    def test_default_stage_empty(self, tmp_path):
        log_dir = tmp_path / "logs"
        config = SplitterConfig(_env_file=None, log_dir=log_dir)
        config.setup_logging()
        logger.info("no stage bound")
        content = (log_dir / "cue-split.log").read_text()
        assert "no stage bound" in content

    def test_level_filters_stderr(self, tmp_path, capsys):
        config = SplitterConfig(_env_file=None, log_level="warning")
        config.setup_logging()
        logger.info("quiet")
        logger.warning("loud")
        err = capsys.readouterr().err
        assert "loud" in err
        assert "quiet" not in err
