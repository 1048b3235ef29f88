"""RDS and Redshift event checks against fake clients."""

from aws_checks.checks import RDSEventsCheck, RedshiftEventsCheck
from aws_checks.cli_parser import CliParser
from aws_checks.core.severity import Severity
from conftest import FakeClient, client_error


def _run(check, argv, session):
    return check(CliParser.parse_arguments(check, argv), session).run()


def _rds(events):
    return FakeClient(
        describe_db_instances={
            "DBInstances": [{"DBInstanceIdentifier": name} for name in events]
        },
        describe_events=lambda SourceIdentifier, **kwargs: {
            "Events": [{"Message": message} for message in events[SourceIdentifier]]
        },
    )


def test_rds_latest_event_decides(make_session):
    rds = _rds({
        "db1": ["Backing up DB instance", "Finished DB Instance backup"],
        "db2": ["Finished applying modification", "DB instance shutdown"],
        "db3": ["Reboot of DB instance has started"],
        "db4": [],
    })
    result = _run(RDSEventsCheck, [], make_session(rds=rds))

    assert result.severity is Severity.CRITICAL
    assert result.message == "Clusters w/ critical events: db2,db3"
    assert all(call["SourceType"] == "db-instance" for call in rds.called("describe_events"))


def test_rds_no_critical_events(make_session):
    result = _run(RDSEventsCheck, ["--db-instance-ids", "db1"], make_session(rds=_rds({"db1": ["Finished DB Instance backup"], "db2": ["is being"]})))
    assert result.severity is Severity.OK


def test_rds_api_error_is_unknown(make_session):
    rds = FakeClient(describe_db_instances=client_error("AccessDenied", "DescribeDBInstances"))
    result = _run(RDSEventsCheck, [], make_session(rds=rds))

    assert result.severity is Severity.UNKNOWN
    assert result.exit_code == 3
    assert result.message.startswith("An error occurred processing AWS RDS API: ")


def _redshift(events):
    return FakeClient(
        describe_clusters={"Clusters": [{"ClusterIdentifier": name} for name in events]},
        describe_events=lambda SourceIdentifier, **kwargs: {
            "Events": [{"EventId": event_id} for event_id in events[SourceIdentifier]]
        },
    )


def test_redshift_cluster_in_maintenance(make_session):
    redshift = _redshift({
        "warehouse": ["REDSHIFT-EVENT-2000", "REDSHIFT-EVENT-2003"],
        "lake": ["REDSHIFT-EVENT-2003", "REDSHIFT-EVENT-2004"],
    })
    result = _run(RedshiftEventsCheck, [], make_session(redshift=redshift))

    assert result.severity is Severity.CRITICAL
    assert result.message == "Clusters in maintenance: warehouse"
    assert all(call["SourceType"] == "cluster" for call in redshift.called("describe_events"))


def test_redshift_only_requested_clusters(make_session):
    redshift = _redshift({"warehouse": ["REDSHIFT-EVENT-2003"], "lake": []})
    result = _run(RedshiftEventsCheck, ["--clusters", "lake"], make_session(redshift=redshift))

    assert result.severity is Severity.OK
    assert [call["SourceIdentifier"] for call in redshift.called("describe_events")] == ["lake"]


def test_redshift_missing_cluster_is_unknown(make_session):
    redshift = _redshift({"warehouse": []})
    result = _run(RedshiftEventsCheck, ["-c", "warehouse,lake,sea"], make_session(redshift=redshift))

    assert result.severity is Severity.UNKNOWN
    assert result.message == "Passed cluster(s): lake,sea not found"


def test_redshift_api_error_is_unknown(make_session):
    redshift = FakeClient(describe_clusters=client_error("ClusterNotFound", "DescribeClusters"))
    result = _run(RedshiftEventsCheck, [], make_session(redshift=redshift))

    assert result.severity is Severity.UNKNOWN
    assert result.message.startswith("An error occurred processing AWS Redshift API: ")
