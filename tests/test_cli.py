# tests/test_cli.py

from __future__ import annotations

import pytest

from errands import ErrandManager, ErrandsSettings, Location, Priority
from errands.cli import build_parser, format_errand, main
from errands.schema import ListedErrand


@pytest.fixture()
def env(monkeypatch: pytest.MonkeyPatch, settings: ErrandsSettings) -> ErrandsSettings:
    """Point main()'s own ErrandsSettings at the tmp locations."""
    monkeypatch.setenv("ERRANDS_LOCAL_PATH", str(settings.local_path))
    monkeypatch.setenv("ERRANDS_USER_PATH", str(settings.user_path))
    monkeypatch.setenv("ERRANDS_GLOBAL_PATH", str(settings.global_path))
    return settings


def _stdout_lines(capsys: pytest.CaptureFixture[str]) -> list[str]:
    return capsys.readouterr().out.splitlines()


def test_parser_has_every_command() -> None:
    parser = build_parser()
    for argv in (["init", "local"], ["clean"], ["add", "x"], ["list"], ["rm", "x"]):
        assert parser.parse_args(argv).command == argv[0]


def test_no_command_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([]) == 1
    assert "usage" in capsys.readouterr().out


def test_full_session(env: ErrandsSettings, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["init", "local"]) == 0
    assert env.local_path.is_file()

    assert main(["add", "call bank", "-p", "urgent"]) == 0
    assert main(["add", "buy milk"]) == 0
    assert main(["add", "water plants", "-p", "4"]) == 0
    capsys.readouterr()

    assert main(["list"]) == 0
    assert _stdout_lines(capsys) == ["call bank", "buy milk", "water plants"]

    assert main(["list", "-p", "routine"]) == 0
    assert _stdout_lines(capsys) == ["buy milk", "water plants"]

    assert main(["list", "-o", "ascending", "-c", "2"]) == 0
    assert _stdout_lines(capsys) == ["water plants", "buy milk"]

    assert main(["list", "-i", "^b"]) == 0
    assert _stdout_lines(capsys) == ["call bank", "water plants"]

    assert main(["rm", "-p", "routine", "buy milk"]) == 0
    reopened = ErrandManager.open(Location.LOCAL, env)
    assert reopened.buckets[Priority.ROUTINE] == ["water plants"]


def test_clean_priority_then_list_it(env: ErrandsSettings, capsys: pytest.CaptureFixture[str]) -> None:
    ErrandManager.create(Location.LOCAL, env)
    assert main(["clean", "-p", "urgent"]) == 0
    assert Priority.URGENT not in ErrandManager.open(Location.LOCAL, env).buckets

    capsys.readouterr()
    assert main(["list", "-p", "urgent"]) == 5
    assert "Priority not found: Urgent" in capsys.readouterr().err


def test_clean_everything(env: ErrandsSettings) -> None:
    manager = ErrandManager.create(Location.USER, env)
    manager.add("buy milk")
    manager.persist(Location.USER)

    assert main(["clean", "-l", "user"]) == 0
    assert ErrandManager.open(Location.USER, env).buckets == {}


def test_commands_probe_locations(env: ErrandsSettings, capsys: pytest.CaptureFixture[str]) -> None:
    ErrandManager.create(Location.GLOBAL, env)
    assert main(["add", "from global"]) == 0
    capsys.readouterr()

    assert main(["list", "-l", "global"]) == 0
    assert _stdout_lines(capsys) == ["from global"]


def test_missing_list(env: ErrandsSettings, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["list"]) == 3
    assert "Errands list not found" in capsys.readouterr().err


def test_malformed_list(env: ErrandsSettings, capsys: pytest.CaptureFixture[str]) -> None:
    env.local_path.parent.mkdir(parents=True)
    env.local_path.write_text("Routine: [unclosed\n")
    assert main(["add", "x"]) == 4
    assert "Malformed" in capsys.readouterr().err


def test_list_not_utf8(env: ErrandsSettings, capsys: pytest.CaptureFixture[str]) -> None:
    env.local_path.parent.mkdir(parents=True)
    env.local_path.write_bytes(b"Routine:\n  - caf\xe9\n")
    assert main(["list"]) == 4
    assert "Malformed" in capsys.readouterr().err


def test_bad_pattern(env: ErrandsSettings, capsys: pytest.CaptureFixture[str]) -> None:
    ErrandManager.create(Location.LOCAL, env)
    assert main(["list", "-i", "(oops"]) == 6
    assert "Invalid ignore pattern" in capsys.readouterr().err


def test_init_without_force_keeps_existing(env: ErrandsSettings) -> None:
    manager = ErrandManager.create(Location.LOCAL, env)
    manager.add("keep me")
    manager.persist(Location.LOCAL)

    assert main(["init", "local"]) == 2
    assert main(["init", "local", "--force"]) == 0
    assert ErrandManager.open(Location.LOCAL, env).list() == []


@pytest.mark.parametrize("argv", [["add", "x", "-p", "soon"], ["list", "-c", "-1"], ["list", "-o", "sideways"]])
def test_bad_arguments_exit_2(argv: list[str]) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(argv)
    assert exc_info.value.code == 2


def test_format_errand_colors_by_priority() -> None:
    errand = ListedErrand(priority=Priority.URGENT, description="call bank")
    assert format_errand(errand, color=False) == "call bank"
    colored = format_errand(errand, color=True)
    assert colored.startswith("\x1b[31m")
    assert "call bank" in colored
    assert colored.endswith("\x1b[0m")
