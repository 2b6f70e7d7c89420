import json
import logging

from dgmapper import create_app, logging_utils
from dgmapper.dungeon import parse_chess_string as P
from dgmapper.server import _configure_logging


def test_level_filtering(monkeypatch, capsys):
    log = logging_utils.get_logger("test.level")
    monkeypatch.setenv("DGMAPPER_LOG_LEVEL", "info")
    log.debug(event="hidden")
    log.info(event="shown", rooms=3)
    out = capsys.readouterr().out
    assert "hidden" not in out
    assert "event=shown" in out
    assert "rooms=3" in out
    assert "logger=test.level" in out


def test_unknown_level_falls_back_to_info(monkeypatch):
    monkeypatch.setenv("DGMAPPER_LOG_LEVEL", "chatty")
    assert logging_utils.current_level() == logging_utils.LEVELS["info"]


def test_error_goes_to_stderr(monkeypatch, capsys):
    logging_utils.get_logger("test.err").error(event="boom")
    captured = capsys.readouterr()
    assert "event=boom" in captured.err
    assert captured.out == ""


def test_key_value_formatting():
    line = logging_utils._format("info", event="x", ok=True, note="two words", skip=None)
    assert "ok=true" in line
    assert "note=two_words" in line
    assert "skip" not in line
    assert line.startswith("level=info ts=")


def test_json_mode(monkeypatch, capsys):
    monkeypatch.setenv("DGMAPPER_LOG_JSON", "1")
    monkeypatch.setenv("DGMAPPER_LOG_LEVEL", "debug")
    logging_utils.get_logger("test.json").info(event="analyze", rooms=24, boss=None)
    rec = json.loads(capsys.readouterr().out.strip())
    assert rec["event"] == "analyze"
    assert rec["rooms"] == 24
    assert rec["level"] == "info"
    assert rec["logger"] == "test.json"
    assert "boss" not in rec


def test_get_logger_is_cached():
    assert logging_utils.get_logger("same") is logging_utils.get_logger("same")


def test_pruning_emits_debug_events(monkeypatch, capsys, plus_map):
    monkeypatch.setenv("DGMAPPER_LOG_LEVEL", "debug")
    plus_map.remove_dead_end(P("a2"))
    plus_map.rebase(P("b1"))
    out = capsys.readouterr().out
    assert "event=dead_end_removed point=a2" in out
    assert "event=rebased frm=b2 to=b1" in out
    assert "logger=dgmapper.pruning" in out


def test_configure_logging_writes_instance_log(tmp_path):
    app = create_app({"TESTING": True})
    app.instance_path = str(tmp_path / "inst")
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        path = _configure_logging(app)
        # Calling twice must not stack handlers.
        path = _configure_logging(app)
        assert len(root.handlers) == 2
        logging.getLogger("dgmapper.test").info("hello from test")
        for h in root.handlers:
            h.flush()
        with open(path, encoding="utf-8") as f:
            assert "hello from test" in f.read()
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()
        for h in saved_handlers:
            root.addHandler(h)
        root.setLevel(saved_level)
