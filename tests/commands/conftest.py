"""Fixtures for CLI command tests."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner, Result

from datekit.cli import cli
from datekit.services.telemetry import disable_telemetry


@pytest.fixture(autouse=True)
def _restore_state() -> Generator[None]:
    """Undo the logging handler and telemetry flag each CLI run installs."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    disable_telemetry()


@pytest.fixture
def invoke(cli_runner: CliRunner, isolated_cwd: Path) -> Callable[..., Result]:
    """Run the CLI from an empty working directory."""

    def _invoke(*args: str) -> Result:
        return cli_runner.invoke(cli, list(args))

    return _invoke


@pytest.fixture
def invoke_json(invoke: Callable[..., Result]) -> Callable[..., dict[str, Any]]:
    """Run the CLI with ``--json`` and decode stdout."""

    def _invoke(*args: str) -> dict[str, Any]:
        result = invoke("--json", *args)
        assert result.exit_code == 0, result.output
        return json.loads(result.stdout)

    return _invoke
