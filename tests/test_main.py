from pathlib import Path

import pytest

from wave_slot_agent import main
from wave_slot_agent.pipeline import RunResult


@pytest.fixture
def calls(monkeypatch):
    recorded = []

    async def fake_run_check(settings, *, config):
        recorded.append((settings, config))
        return RunResult()

    monkeypatch.setattr(main, "run_check", fake_run_check)
    return recorded


def test_completed_run_exits_zero(calls, tmp_path) -> None:
    state = tmp_path / "custom.json"
    code = main.cli(["--date", "2024-09-27", "--date", "2024-09-28", "--state-file", str(state)])

    assert code == 0
    settings, config = calls[0]
    assert settings.state_file == Path(state)
    assert config.target_dates == ("2024-09-27", "2024-09-28")
    assert config.include_all_dates is False


def test_flags_reach_the_effective_config(calls) -> None:
    assert main.cli(["--all-dates"]) == 0
    _, config = calls[0]
    assert config.include_all_dates is True


def test_failed_run_exits_one(monkeypatch) -> None:
    async def broken(settings, *, config):
        raise RuntimeError("page did not load")

    monkeypatch.setattr(main, "run_check", broken)
    assert main.cli([]) == 1


def test_invalid_settings_exit_two(monkeypatch, calls) -> None:
    monkeypatch.setenv("WAVEPARK_TIMEOUT_SECONDS", "soon")
    assert main.cli([]) == 2
    assert calls == []


def test_invalid_date_argument_is_rejected(calls) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main.cli(["--date", "27/09/2024"])
    assert excinfo.value.code == 2
