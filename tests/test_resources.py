"""Unit tests for the resource plugins and name filtering."""

import pytest

from aws_checks.core.exceptions import ResourceError
from aws_checks.resources import (
    DynamoDBPlugin,
    EC2Plugin,
    ELBPlugin,
    RDSPlugin,
    RedshiftPlugin,
    Resource,
    ResourceScanner,
    select_by_name,
)
from conftest import END_TIME, FakeClient, client_error


def _table(name, read, write):
    return {
        "Table": {
            "TableName": name,
            "TableArn": f"arn:aws:dynamodb:eu-west-1:123:table/{name}",
            "ProvisionedThroughput": {"ReadCapacityUnits": read, "WriteCapacityUnits": write},
        }
    }


def test_select_by_name_keeps_everything_without_names():
    items = [Resource("ELB", "a"), Resource("ELB", "b")]
    assert select_by_name(items, None) == items
    assert select_by_name(items, []) == items
    assert [r.name for r in select_by_name(items, ["b", "c"])] == ["b"]


def test_dynamodb_discover_filters_before_describe(make_session):
    dynamodb = FakeClient(
        list_tables=[{"TableNames": ["session"]}, {"TableNames": ["users", "orders"]}],
        describe_table=lambda TableName: _table(TableName, 10, 5),
    )
    tables = DynamoDBPlugin(make_session(dynamodb=dynamodb)).discover(["users", "missing"])

    assert [t.name for t in tables] == ["users"]
    assert tables[0].attributes == {"read_capacity_units": 10, "write_capacity_units": 5}
    assert dynamodb.called("describe_table") == [{"TableName": "users"}]


def test_elb_instance_health_limits_instances(make_session):
    elb = FakeClient(describe_instance_health={"InstanceStates": [{"InstanceId": "i-1", "State": "InService"}]})
    plugin = ELBPlugin(make_session(elb=elb))

    assert plugin.instance_health("app", ["i-1"]) == [{"InstanceId": "i-1", "State": "InService"}]
    plugin.instance_health("app")
    assert elb.called("describe_instance_health") == [
        {"LoadBalancerName": "app", "Instances": [{"InstanceId": "i-1"}]},
        {"LoadBalancerName": "app"},
    ]


def test_rds_get_instance_not_found(make_session):
    rds = FakeClient(describe_db_instances=client_error("DBInstanceNotFound", "DescribeDBInstances"))
    with pytest.raises(ResourceError):
        RDSPlugin(make_session(rds=rds)).get_instance("db1")


def test_rds_get_instance_other_errors_propagate(make_session):
    rds = FakeClient(describe_db_instances=client_error("AccessDenied", "DescribeDBInstances"))
    with pytest.raises(Exception) as excinfo:
        RDSPlugin(make_session(rds=rds)).get_instance("db1")
    assert not isinstance(excinfo.value, ResourceError)


def test_rds_recent_events_window(make_session):
    rds = FakeClient(describe_events={"Events": [{"Message": "DB instance restarted"}]})
    events = RDSPlugin(make_session(rds=rds)).recent_events("db1", 2, now=END_TIME)

    assert events == [{"Message": "DB instance restarted"}]
    request = rds.called("describe_events")[0]
    assert request["SourceType"] == "db-instance"
    assert request["SourceIdentifier"] == "db1"
    assert (END_TIME - request["StartTime"]).total_seconds() == 7200


def test_redshift_missing_clusters(make_session):
    redshift = FakeClient(describe_clusters={"Clusters": [{"ClusterIdentifier": "warehouse"}]})
    plugin = RedshiftPlugin(make_session(redshift=redshift))
    clusters = plugin.discover()

    assert [c.name for c in clusters] == ["warehouse"]
    assert plugin.missing(["warehouse", "lake"], clusters) == ["lake"]


def test_ec2_discover_vpn_connections(make_session):
    ec2 = FakeClient(
        describe_vpn_connections={
            "VpnConnections": [
                {
                    "VpnConnectionId": "vpn-1",
                    "State": "available",
                    "VgwTelemetry": [{"OutsideIpAddress": "1.1.1.1", "Status": "UP"}],
                },
                {"VpnConnectionId": "vpn-2", "State": "deleted"},
            ]
        }
    )
    plugin = EC2Plugin(make_session(ec2=ec2))

    connections = plugin.discover()
    assert [(c.id, c.attributes["state"]) for c in connections] == [("vpn-1", "available"), ("vpn-2", "deleted")]
    assert connections[1].attributes["tunnels"] == []
    assert ec2.called("describe_vpn_connections") == [{}]

    plugin.vpn_connection("vpn-1")
    assert ec2.called("describe_vpn_connections")[-1] == {"VpnConnectionIds": ["vpn-1"]}


def test_vpn_connection_not_found(make_session):
    ec2 = FakeClient(describe_vpn_connections={"VpnConnections": []})
    with pytest.raises(ResourceError):
        EC2Plugin(make_session(ec2=ec2)).vpn_connection("vpn-1")

    ec2 = FakeClient(describe_vpn_connections=client_error("InvalidVpnConnectionID.NotFound"))
    with pytest.raises(ResourceError):
        EC2Plugin(make_session(ec2=ec2)).vpn_connection("vpn-1")


def test_scanner_reuses_plugins_and_rejects_unknown_services(make_session):
    scanner = ResourceScanner(make_session(elb=FakeClient(describe_load_balancers={"LoadBalancerDescriptions": []})))
    assert scanner.plugin("elb") is scanner.plugin("elb")
    assert scanner.scan_resources("elb") == []
    with pytest.raises(ValueError):
        scanner.plugin("sqs")
