"""Flag parsing, config file defaults and usage errors."""

import pytest

from aws_checks.checks import DynamoDBCapacityCheck, ELBHealthCheck, RDSCheck, RedshiftEventsCheck
from aws_checks.cli_parser import CliParser
from aws_checks.core.exceptions import ConfigurationError, UsageError
from aws_checks.utils import split_names
from conftest import END_TIME


def test_split_names_accepts_commas_and_semicolons():
    assert split_names("a,b; c;") == ["a", "b", "c"]


def test_common_defaults(monkeypatch):
    monkeypatch.setenv("AWS_DEFAULT_REGION", "ap-southeast-2")
    args = CliParser.parse_arguments(ELBHealthCheck, [])

    assert args.region == "ap-southeast-2"
    assert args.profile is None
    assert args.verbose is False
    assert args.with_reasons is False


def test_metric_check_flags():
    args = CliParser.parse_arguments(
        DynamoDBCapacityCheck,
        ["-n", "users,sessions", "-c", "read", "-t", "2024-05-01T12:00:00Z", "-S", "Maximum", "--critical-over", "90"],
    )
    assert args.table_names == ["users", "sessions"]
    assert args.end_time == END_TIME
    assert args.statistics == "maximum"
    assert args.critical_over == 90.0
    assert args.warning_over is None
    assert args.period == 60


@pytest.mark.parametrize(
    "argv",
    [
        [],
        ["-i", "db1", "--end-time", "yesterday"],
        ["-i", "db1", "--statistics", "median"],
        ["-i", "db1", "--no-such-flag"],
    ],
)
def test_usage_errors_raise(argv):
    with pytest.raises(UsageError) as excinfo:
        CliParser.parse_arguments(RDSCheck, argv)
    assert str(excinfo.value).startswith("check-rds: ")


def _write_config(tmp_path, text):
    path = tmp_path / "checks.yml"
    path.write_text(text)
    return str(path)


def test_config_file_supplies_defaults(tmp_path):
    config = _write_config(
        tmp_path,
        "rds:\n"
        "  db-instance-id: db1\n"
        "  cpu-warning-over: 70\n"
        "  cpu-critical-over: 90\n",
    )
    args = CliParser.parse_arguments(RDSCheck, ["--config", config, "--cpu-critical-over", "95"])

    assert args.db_instance_id == "db1"
    assert args.cpu_warning_over == 70
    assert args.cpu_critical_over == 95.0


def test_config_string_defaults_go_through_flag_types(tmp_path):
    config = _write_config(tmp_path, "redshift-events:\n  clusters: warehouse;lake\n")
    args = CliParser.parse_arguments(RedshiftEventsCheck, ["--config", config])
    assert args.clusters == ["warehouse", "lake"]


def test_config_sections_of_other_checks_are_ignored(tmp_path):
    config = _write_config(tmp_path, "elb-latency:\n  warning-over: 1\n")
    args = CliParser.parse_arguments(RedshiftEventsCheck, ["--config", config])
    assert args.clusters == []


def test_unknown_config_option(tmp_path):
    config = _write_config(tmp_path, "rds:\n  cpu-over: 70\n")
    with pytest.raises(ConfigurationError, match="cpu_over"):
        CliParser.parse_arguments(RDSCheck, ["--config", config])


def test_missing_config_file(tmp_path):
    with pytest.raises(ConfigurationError):
        CliParser.parse_arguments(RDSCheck, ["--config", str(tmp_path / "absent.yml")])


def test_rds_usage_limits_default_and_can_be_skipped(tmp_path):
    args = CliParser.parse_arguments(RDSCheck, ["-i", "db1", "--disk-critical-over", "none"])
    assert args.cpu_warning_over == 80.0
    assert args.disk_critical_over is None

    config = _write_config(tmp_path, "rds:\n  memory-warning-over: off-limits\n")
    with pytest.raises(UsageError):
        CliParser.parse_arguments(RDSCheck, ["-i", "db1", "--config", config])

    config = _write_config(tmp_path, "rds:\n  memory-warning-over: none\n")
    args = CliParser.parse_arguments(RDSCheck, ["-i", "db1", "--config", config])
    assert args.memory_warning_over is None
