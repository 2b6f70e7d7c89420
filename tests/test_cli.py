import importlib
import json
import os
import sys

import pytest

from conftest import PLUS_MAP, TREE_MAP

# run.py is imported as a module; start_server is patched so no networking
# happens when the server command is exercised.


@pytest.fixture()
def run_module():
    # Clean import each time (run.py reads VERSION at import)
    if 'run' in sys.modules:
        del sys.modules['run']
    return importlib.import_module('run')


@pytest.fixture()
def fake_server(monkeypatch):
    calls = {}

    def fake_start_server(host, port, debug):
        calls['host'] = host
        calls['port'] = port
        calls['debug'] = debug

    import dgmapper.server as server_mod

    monkeypatch.setattr(server_mod, 'start_server', fake_start_server)
    return calls


def test_version_flag_outputs_version(run_module, capsys):
    with pytest.raises(SystemExit) as exc:
        run_module.parse_args(['--version'])
    assert exc.value.code == 0
    out = capsys.readouterr().out
    assert run_module.__version__ in out
    assert 'Dungeon Mapper' in out


def test_default_command_is_server(run_module):
    assert run_module.parse_args([]).command == 'server'


def test_server_main_invokes_start_server(monkeypatch, run_module, fake_server):
    monkeypatch.setenv('PORT', '5555')
    monkeypatch.setenv('HOST', '127.0.0.1')
    assert run_module.main(['server']) == 0
    assert fake_server == {'host': '127.0.0.1', 'port': 5555, 'debug': False}


def test_server_flags_override_env(monkeypatch, run_module, fake_server):
    monkeypatch.setenv('PORT', '5555')
    run_module.main(['server', '--host', '0.0.0.0', '--port', '6100', '--debug'])
    assert fake_server['host'] == '0.0.0.0'
    assert fake_server['port'] == 6100
    assert fake_server['debug'] is True


def test_env_file_argument(monkeypatch, tmp_path, run_module, fake_server):
    monkeypatch.delenv('HOST', raising=False)
    monkeypatch.delenv('PORT', raising=False)
    env_file = tmp_path / '.env'
    env_file.write_text('HOST=0.0.0.0\nPORT=6001\n')
    run_module.main(['--env-file', str(env_file), 'server'])
    assert fake_server['host'] == '0.0.0.0'
    assert fake_server['port'] == 6001
    # load_dotenv wrote straight into os.environ; monkeypatch will not undo it.
    os.environ.pop('HOST', None)
    os.environ.pop('PORT', None)


def test_analyze_json(run_module, capsys):
    assert run_module.main(['analyze', TREE_MAP, '--json']) == 0
    data = json.loads(capsys.readouterr().out)
    assert data['diameter'] == 5
    assert data['crit_rooms'] == ['b1', 'c1', 'c2', 'c3']


def test_analyze_text(run_module, capsys):
    assert run_module.main(['analyze', PLUS_MAP]) == 0
    out = capsys.readouterr().out
    assert out.startswith('E.W\n-N-\n')
    assert 'Diameter:' in out
    assert 'a2 c2' in out  # bonus dead ends


def test_pretty(run_module, capsys):
    assert run_module.main(['pretty', TREE_MAP]) == 0
    assert capsys.readouterr().out.split() == ['----', 'EE.W', '--N-', '-EN-']


def test_prune_prints_updated_map(run_module, capsys):
    assert run_module.main(['prune', TREE_MAP, 'a3', 'b3']) == 0
    assert capsys.readouterr().out.strip() == '4 4 ----/--.W/--N-/-EN- c3 b1'


def test_rebase_prints_updated_map(run_module, capsys):
    assert run_module.main(['rebase', PLUS_MAP, 'b1']) == 0
    assert capsys.readouterr().out.strip() == '3 2 ESW/-.- b1 - b1'


def test_sample_is_reproducible(run_module, capsys):
    run_module.main(['sample', '--seed', '4', '--rooms', '10'])
    first = capsys.readouterr().out
    run_module.main(['sample', '--seed', '4', '--rooms', '10'])
    assert capsys.readouterr().out == first
    assert first.split()[:2] == ['8', '8']


@pytest.mark.parametrize(
    'argv,needle',
    [
        (['analyze', '3 2 E.X/-N- b2 - b1'], 'unknown direction glyph'),
        (['prune', TREE_MAP, 'c2'], 'is not a dead end'),
        (['rebase', PLUS_MAP, 'a1'], 'non-room'),
        (['analyze', '2 2 EW/.- a1 -'], 'do not reach the base'),
    ],
)
def test_errors_go_to_stderr_with_exit_1(run_module, capsys, argv, needle):
    assert run_module.main(argv) == 1
    err = capsys.readouterr().err
    assert err.startswith('[ERROR]')
    assert needle in err


def test_sample_rejects_bad_dimensions(run_module, capsys):
    assert run_module.main(['sample', '--width', '0']) == 1
    assert 'dimensions must be positive' in capsys.readouterr().err
