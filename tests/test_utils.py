import pathlib

import pytest

from statement_recon.utils import ensure_directory, setup_logging


class TestSetupLogging:
    """Test suite for logging configuration"""

    def test_explicit_log_file(self, tmp_path):
        log_file = tmp_path / 'logs' / 'run.log'
        assert setup_logging(log_file=log_file) == log_file
        assert log_file.exists()

    def test_env_log_file(self, tmp_path, monkeypatch):
        monkeypatch.setenv('LOG_FILE', str(tmp_path / 'env.log'))
        assert setup_logging(debug=True) == tmp_path / 'env.log'

    def test_returns_path(self, tmp_path):
        assert isinstance(setup_logging(log_file=str(tmp_path / 'x.log')), pathlib.Path)


class TestEnsureDirectory:

    def test_creates_nested(self, tmp_path):
        target = tmp_path / 'a' / 'b'
        assert ensure_directory(target) == target
        assert target.is_dir()

    def test_rejects_file(self, tmp_path):
        path = tmp_path / 'file.csv'
        path.write_text('x', encoding='utf-8')
        with pytest.raises(ValueError, match='not a directory'):
            ensure_directory(path)
