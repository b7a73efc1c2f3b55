import importlib
import json
import sys

import pytest

# Import run.py as a module and exercise parse_args + main with a patched
# start_server so no networking happens.


@pytest.fixture()
def run_module():
    if 'run' in sys.modules:
        del sys.modules['run']
    return importlib.import_module('run')


def test_version_flag_outputs_version(run_module, capsys):
    with pytest.raises(SystemExit) as exc:
        run_module.parse_args(['--version'])
    assert exc.value.code == 0
    out = capsys.readouterr().out
    assert run_module.__version__ in out
    assert 'Hex Map Generator' in out


def test_default_command_is_serve(run_module):
    assert run_module.parse_args([]).command == 'serve'


def test_serve_invokes_start_server(monkeypatch, run_module):
    calls = {}

    def fake_start_server(host, port, debug):
        calls.update(host=host, port=port, debug=debug)

    monkeypatch.setenv('PORT', '5555')
    monkeypatch.setenv('HOST', '127.0.0.1')
    import mapgen.server as server_mod
    monkeypatch.setattr(server_mod, 'start_server', fake_start_server)

    assert run_module.main(['serve']) == 0
    assert calls == {'host': '127.0.0.1', 'port': 5555, 'debug': False}


def test_serve_flags_override_env(monkeypatch, run_module):
    calls = {}
    monkeypatch.setenv('PORT', '5555')
    import mapgen.server as server_mod
    monkeypatch.setattr(server_mod, 'start_server', lambda h, p, d: calls.update(host=h, port=p, debug=d))
    run_module.main(['serve', '--host', 'localhost', '--port', '8080', '--debug'])
    assert calls == {'host': 'localhost', 'port': 8080, 'debug': True}


def test_generate_to_stdout(run_module, capsys):
    code = run_module.main(['generate', '--seed', 'cli-seed', '--count', '12'])
    assert code == 0
    data = json.loads(capsys.readouterr().out)
    assert data['metadata']['seed'] == 'cli-seed'
    assert len(data['hexagons']) == 12


def test_generate_is_deterministic(run_module, capsys):
    run_module.main(['generate', '--seed', 'same', '--count', '20'])
    first = json.loads(capsys.readouterr().out)
    run_module.main(['generate', '--seed', 'same', '--count', '20'])
    second = json.loads(capsys.readouterr().out)
    assert first['hexagons'] == second['hexagons']


def test_generate_to_file(run_module, tmp_path, capsys):
    target = tmp_path / 'map.json'
    code = run_module.main(['generate', '--seed', 'file', '--count', '8', '-o', str(target)])
    assert code == 0
    assert capsys.readouterr().out == ''
    data = json.loads(target.read_text(encoding='utf-8'))
    assert len(data['hexagons']) == 8


def test_generate_with_validation(run_module, capsys):
    code = run_module.main(['generate', '--seed', 'v', '--count', '30', '--corridor-ratio', '1.0', '--validate'])
    assert code == 0
    captured = capsys.readouterr()
    # stderr carries log lines too; the report is the indented JSON block
    assert '"isValid": true' in captured.err
    assert '"hasValidRatio": true' in captured.err
    assert len(json.loads(captured.out)['hexagons']) == 30


def test_generate_validation_failure_exit_code(run_module, capsys):
    # origin is always a corridor, so 1 of 3 hexagons is off a 0.0 ratio by more than 0.15
    code = run_module.main(['generate', '--seed', 'v', '--count', '3', '--corridor-ratio', '0.0', '--validate'])
    assert code == 1
    assert '"hasValidRatio": false' in capsys.readouterr().err


def test_generate_count_from_env(monkeypatch, run_module, capsys):
    monkeypatch.setenv('DEFAULT_HEXAGON_COUNT', '7')
    assert run_module.main(['generate', '--seed', 'env']) == 0
    assert len(json.loads(capsys.readouterr().out)['hexagons']) == 7


@pytest.mark.parametrize(
    'extra',
    [
        ['--corridor-ratio', '1.5'],
        ['--room-min', '9', '--room-max', '3'],
        ['--widths', '1,5'],
        ['--count', '0'],
    ],
)
def test_generate_rejects_bad_options(run_module, capsys, extra):
    code = run_module.main(['generate', '--seed', 'bad'] + extra)
    assert code == 2
    assert '[ERROR]' in capsys.readouterr().err
