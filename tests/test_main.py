import io
import json
import logging
from datetime import datetime
from pathlib import Path

import pytest

from tracktides.core.settings import Settings, SampleDataConfig
from tracktides.main import build_parser, main, run
from tracktides.shared.colored_logging import ColoredFormatter, setup_colored_logging
from tracktides.shared.logging_setup import resolve_level
from tracktides.shared.models import TimeRange


NOW = datetime(2026, 10, 19, 8, 0)


def _write(tmp_path: Path, content: str) -> Path:
    p = tmp_path / "tracktides.yaml"
    p.write_text(content, encoding="utf-8")
    return p


def test_run_report_has_every_chart():
    settings = Settings(sample_data=SampleDataConfig(days=60, seed=42))
    text = run(settings, NOW, time_range=TimeRange.SIX_MONTHS)
    assert "Weight [6M]" in text
    assert "Weight Change [6M]" in text
    assert "Injection Pain [6M]" in text
    assert "Health Summary:" in text


def test_run_is_deterministic_for_a_seed():
    settings = Settings(sample_data=SampleDataConfig(days=30))
    assert run(settings, NOW, seed=1) == run(settings, NOW, seed=1)


def test_main_prints_report(capsys):
    rc = main(["--range", "W", "--now", "2026-10-19T08:00:00", "--seed", "3", "--days", "21",
               "--log-level", "WARNING"])
    out = capsys.readouterr().out
    assert rc == 0
    assert "Weight [W]" in out
    assert "AVERAGE" in out


def test_main_print_config(tmp_path: Path, capsys):
    path = _write(tmp_path, "charts:\n  default_time_range: Y\nsample_data:\n  days: 5\n")
    rc = main(["--config", str(path), "--print-config", "--days", "9"])
    data = json.loads(capsys.readouterr().out)
    assert rc == 0
    assert data["charts"]["default_time_range"] == "Y"
    assert data["sample_data"]["days"] == 9
    assert data["config_path"] == str(path)


def test_main_missing_config_returns_1():
    assert main(["--config", "/nonexistent/tracktides.yaml"]) == 1


def test_main_negative_days_returns_1():
    assert main(["--days", "-1"]) == 1


def test_main_bad_now_returns_1():
    assert main(["--now", "yesterday", "--days", "1"]) == 1


def test_parser_rejects_unknown_range():
    parser = build_parser()
    args = parser.parse_args(["--range", "6M"])
    assert args.time_range == "6M"
    try:
        parser.parse_args(["--range", "2W"])
    except SystemExit as e:
        assert e.code == 2
    else:
        raise AssertionError("expected argparse to reject --range 2W")


def test_colored_formatter_plain_on_non_tty():
    stream = io.StringIO()
    handler = setup_colored_logging(level=logging.INFO, stream=stream, fmt="%(levelname)s %(message)s")
    logging.getLogger("tracktides.test").warning("careful")
    assert stream.getvalue() == "WARNING careful\n"
    assert logging.getLogger().handlers == [handler]


def test_colored_formatter_restores_levelname():
    formatter = ColoredFormatter(fmt="%(levelname)s", use_colors=True)
    formatter.use_colors = True
    record = logging.LogRecord("x", logging.ERROR, __file__, 1, "boom", None, None)
    assert formatter.format(record) == "\033[31mERROR\033[0m"
    assert record.levelname == "ERROR"


def test_resolve_level():
    assert resolve_level("debug") == logging.DEBUG
    assert resolve_level(logging.ERROR) == logging.ERROR
    assert resolve_level("nonsense") == logging.INFO


@pytest.mark.parametrize("body", [
    "sample_data:\n  medication: ''\n",
    "sample_data:\n  medication: 123\n",
    "sample_data:\n  days: 2.5\n",
    "sample_data:\n  seed: -1\n",
])
def test_main_bad_sample_data_returns_1(tmp_path: Path, body: str):
    assert main(["--config", str(_write(tmp_path, body))]) == 1


def test_main_days_override_keeps_config_values(tmp_path: Path, capsys):
    path = _write(tmp_path, "sample_data:\n  days: 5\n  seed: 11\n  medication: Semaglutide\n")
    assert main(["--config", str(path), "--print-config", "--days", "12"]) == 0
    data = json.loads(capsys.readouterr().out)["sample_data"]
    assert data["days"] == 12
    assert data["seed"] == 11
    assert data["medication"] == "Semaglutide"
