from __future__ import annotations

import logging

import pytest
from typer.testing import CliRunner

from crazy_eights import logging_utils
from crazy_eights.cli.main import app

runner = CliRunner()


def test_simulate_prints_tally() -> None:
    result = runner.invoke(app, ["simulate", "--rounds", "4", "--seed", "9", "--check"])

    assert result.exit_code == 0, result.output
    assert "Crazy Eights Simulation" in result.output
    assert "4 round(s) simulated." in result.output


def test_simulate_with_random_player() -> None:
    result = runner.invoke(app, ["simulate", "--rounds", "2", "--random-player"])

    assert result.exit_code == 0, result.output
    assert "random" in result.output


def test_simulate_rejects_zero_rounds() -> None:
    result = runner.invoke(app, ["simulate", "--rounds", "0"])

    assert result.exit_code != 0


@pytest.mark.parametrize(
    ("name", "expected"),
    [("debug", logging.DEBUG), ("INFO", logging.INFO), ("error", logging.ERROR), ("chatty", logging.WARNING)],
)
def test_resolve_level(name: str, expected: int) -> None:
    assert logging_utils.resolve_level(name) == expected
