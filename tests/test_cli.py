import importlib
import json
import sys

import pytest

# We import run.py as a module and exercise parse_args + main with a patched
# start_server so we do not actually start networking.


@pytest.fixture()
def run_module():
    # Ensure a clean import each time (run.py reads VERSION once)
    if "run" in sys.modules:
        del sys.modules["run"]
    return importlib.import_module("run")


@pytest.fixture()
def fake_server(monkeypatch):
    calls = {}

    def fake_start_server(host, port, debug):  # signature match
        calls["host"] = host
        calls["port"] = port
        calls["debug"] = debug

    import roomgen.server as server_mod

    monkeypatch.setattr(server_mod, "start_server", fake_start_server)
    return calls


def test_version_flag_outputs_version(run_module, capsys):
    with pytest.raises(SystemExit) as exc:
        run_module.parse_args(["--version"])
    assert exc.value.code == 0
    out = capsys.readouterr().out
    assert run_module.__version__ in out
    assert "roomgen" in out


def test_default_command_is_server(run_module):
    assert run_module.parse_args([]).command == "server"


def test_server_main_invokes_start_server(monkeypatch, run_module, fake_server):
    monkeypatch.setenv("PORT", "5555")
    monkeypatch.setenv("HOST", "127.0.0.1")
    monkeypatch.delenv("FLASK_DEBUG", raising=False)
    assert run_module.main(["server"]) == 0
    assert fake_server == {"host": "127.0.0.1", "port": 5555, "debug": False}


def test_server_flags_override_env(monkeypatch, run_module, fake_server):
    monkeypatch.setenv("PORT", "5555")
    run_module.main(["server", "--port", "6000", "--host", "localhost", "--debug"])
    assert fake_server == {"host": "localhost", "port": 6000, "debug": True}


def test_env_file_argument(monkeypatch, tmp_path, run_module, fake_server):
    # setenv first so the value loaded from the file is rolled back afterwards
    monkeypatch.setenv("PORT", "1")
    monkeypatch.delenv("PORT")
    env_file = tmp_path / ".env"
    env_file.write_text("PORT=6001\n")
    run_module.main(["--env-file", str(env_file), "server"])
    assert fake_server["port"] == 6001


def test_generate_prints_rows(run_module, capsys):
    code = run_module.main(
        ["generate", "maze", "--width", "5", "--height", "5", "--loop-count", "0", "--dead-end-keep-chance", "1"]
    )
    assert code == 0
    out = capsys.readouterr().out.splitlines()
    assert out[-5:] == ["#####", "#####", "##.##", "#####", "#####"]


def test_generate_with_metrics(run_module, capsys):
    code = run_module.main(["generate", "dungeon", "--width", "12", "--height", "10", "--seed", "4", "--metrics"])
    assert code == 0
    out = capsys.readouterr().out
    lines = out.splitlines()
    start = lines.index("{")
    rows = lines[start - 10 : start]
    assert all(len(r) == 12 and set(r) <= {"#", "."} for r in rows)
    metrics = json.loads("\n".join(lines[start:]))
    assert metrics["kind"] == "dungeon" and metrics["seed"] == 4


def test_generate_invalid_parameter_returns_1(run_module, capsys):
    code = run_module.main(["generate", "dungeon", "--density", "2"])
    assert code == 1
    assert "density" in capsys.readouterr().err


def test_generate_rejects_unknown_kind(run_module):
    with pytest.raises(SystemExit) as exc:
        run_module.parse_args(["generate", "labyrinth"])
    assert exc.value.code == 2
