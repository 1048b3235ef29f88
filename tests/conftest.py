"""
Fake boto3 sessions and clients shared by all tests.

No test talks to AWS: every check runs against FakeClient objects that
return canned responses and record the calls made to them.
"""
import pathlib
import sys
from datetime import datetime, timedelta, timezone

import pytest
from botocore.exceptions import ClientError

# Make project root importable without installing as a package
PROJECT_ROOT = pathlib.Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from aws_checks.core.session import AWSSession  # noqa: E402

END_TIME = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def client_error(code: str, operation: str = "Operation") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": f"{code} raised"}}, operation)


class FakePaginator:
    def __init__(self, client: "FakeClient", operation: str):
        self.client = client
        self.operation = operation

    def paginate(self, **kwargs):
        response = getattr(self.client, self.operation)(**kwargs)
        pages = response if isinstance(response, list) else [response]
        for page in pages:
            yield page


class FakeClient:
    """
    Stand-in for a boto3 client.

    ``responses`` maps an operation name to a response dict, a list of pages
    (for paginated operations), an exception to raise, or a callable taking
    the request kwargs.
    """

    def __init__(self, **responses):
        self.responses = responses
        self.calls = []

    def get_paginator(self, operation: str) -> FakePaginator:
        return FakePaginator(self, operation)

    def __getattr__(self, operation: str):
        if operation.startswith("_"):
            raise AttributeError(operation)

        def call(**kwargs):
            self.calls.append((operation, kwargs))
            if operation not in self.responses:
                raise AssertionError(f"unexpected call to {operation}")
            response = self.responses[operation]
            if isinstance(response, Exception):
                raise response
            if callable(response):
                return response(**kwargs)
            return response

        return call

    def called(self, operation: str):
        return [kwargs for name, kwargs in self.calls if name == operation]


class FakeBotoSession:
    def __init__(self, clients):
        self.clients = clients

    def client(self, service_name, region_name=None):
        if service_name not in self.clients:
            raise AssertionError(f"unexpected client {service_name}")
        return self.clients[service_name]


def cloudwatch_client(values):
    """
    CloudWatch fake keyed by (metric name, dimension value). A missing key or
    a None value answers with no datapoints.
    """

    def get_metric_statistics(**kwargs):
        key = (kwargs["MetricName"], kwargs["Dimensions"][0]["Value"])
        value = values.get(key)
        if value is None:
            return {"Datapoints": []}
        statistic = kwargs["Statistics"][0]
        return {
            "Datapoints": [
                {"Timestamp": kwargs["EndTime"] - timedelta(seconds=kwargs["Period"] * 2), statistic: 0.0},
                {"Timestamp": kwargs["EndTime"] - timedelta(seconds=kwargs["Period"]), statistic: value},
            ]
        }

    return FakeClient(get_metric_statistics=get_metric_statistics)


@pytest.fixture
def make_session():
    def _make(region: str = "eu-west-1", **clients) -> AWSSession:
        return AWSSession(session=FakeBotoSession(clients), region_name=region)

    return _make


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch):
    monkeypatch.setenv("AWS_DEFAULT_REGION", "eu-west-1")
    for name in ("AWS_PROFILE", "AWS_ACCESS_KEY_ID", "AWS_SECRET_ACCESS_KEY", "AWS_SESSION_TOKEN"):
        monkeypatch.delenv(name, raising=False)
