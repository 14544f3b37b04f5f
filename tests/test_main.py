"""Tests for the command-line entry point."""

import pytest

from inventory_sync import main as cli
from inventory_sync.config.models import RoundSummary


@pytest.fixture
def env(monkeypatch):
    monkeypatch.setenv("ERP_API_URL", "https://erp.test/api/products")
    monkeypatch.setenv("EASY_ORDER_BASE_URL", "https://store.test/api")
    monkeypatch.setenv("EASY_ORDER_API_KEY", "env-key")


def test_validate_only(env):
    assert cli.main(["--validate-only"]) == 0


def test_configuration_error_exits_with_1(monkeypatch, capsys):
    for name in ("ERP_API_URL", "EASY_ORDER_BASE_URL", "EASY_ORDER_API_KEY"):
        monkeypatch.delenv(name, raising=False)

    assert cli.main([]) == 1
    assert "Configuration error" in capsys.readouterr().err


def test_continuous_mode_stops_on_interrupt(env, mocker):
    manager = mocker.Mock()
    manager.run_forever.side_effect = KeyboardInterrupt
    mocker.patch.object(cli.SyncManager, "from_config", return_value=manager)

    assert cli.main([]) == 0
    manager.run_forever.assert_called_once_with()


def test_once_runs_a_single_round(env, mocker):
    manager = mocker.Mock()
    manager.run_forever.return_value = RoundSummary(run_id="r", start_time="t", status="completed")
    from_config = mocker.patch.object(cli.SyncManager, "from_config", return_value=manager)

    assert cli.main(["--once", "--dry-run"]) == 0

    config = from_config.call_args[0][0]
    assert config.sync.dry_run is True
    manager.run_forever.assert_called_once_with(max_rounds=1)
    manager.run_round.assert_not_called()


def test_once_skipped_round_exits_with_0(env, mocker):
    mocker.patch.object(
        cli.SyncManager,
        "run_round",
        return_value=RoundSummary(run_id="r", start_time="t", status="skipped"),
    )

    assert cli.main(["--once"]) == 0


@pytest.mark.parametrize("status", ["completed_with_failures", "failed"])
def test_once_with_failures_exits_with_1(env, mocker, status):
    mocker.patch.object(
        cli.SyncManager,
        "run_round",
        return_value=RoundSummary(run_id="r", start_time="t", status=status),
    )

    assert cli.main(["--once"]) == 1


def test_once_error_in_round_is_logged_and_exits_with_1(env, mocker):
    run_round = mocker.patch.object(
        cli.SyncManager, "run_round", side_effect=RuntimeError("boom")
    )

    assert cli.main(["--once"]) == 1
    run_round.assert_called_once_with()
