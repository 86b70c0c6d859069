"""
Tests for the command line launcher.
"""

import logging

import pytest

from devtools_hub import cli
from devtools_hub.config.settings import CONFIG_DIR_ENV


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    monkeypatch.setenv(CONFIG_DIR_ENV, str(tmp_path))
    return tmp_path


class TestPortFile:

    def test_write_and_cleanup(self, config_dir):
        cli.write_port_file(8123)
        assert (config_dir / '.port').read_text() == '8123'

        cli.cleanup_port_file()
        assert not (config_dir / '.port').exists()

    def test_cleanup_without_file(self, config_dir):
        cli.cleanup_port_file()


class TestMain:

    def test_runs_app_and_removes_port_file(self, config_dir, monkeypatch):
        calls = []

        def fake_run(self, host, port, debug):
            assert (config_dir / '.port').read_text() == '9000'
            calls.append((host, port, debug))

        monkeypatch.setattr('flask.Flask.run', fake_run)
        cli.main(['--port', '9000', '--host', '0.0.0.0'])

        assert calls == [('0.0.0.0', 9000, False)]
        assert not (config_dir / '.port').exists()

    def test_keyboard_interrupt_is_clean_shutdown(self, config_dir, monkeypatch):
        def interrupted(self, host, port, debug):
            raise KeyboardInterrupt

        monkeypatch.setattr('flask.Flask.run', interrupted)
        cli.main(['-p', '9001'])
        assert not (config_dir / '.port').exists()


def test_configure_logging_unknown_level_falls_back_to_info(monkeypatch):
    captured = {}
    monkeypatch.setattr(logging, 'basicConfig', lambda **kwargs: captured.update(kwargs))

    cli.configure_logging('chatty')
    assert captured['level'] == logging.INFO

    cli.configure_logging('debug')
    assert captured['level'] == logging.DEBUG
