from moto import mock_aws
from s3_revision_deploy.s3client import S3Client

import boto3
import pytest


class RecordingS3Client:
    """Delegates to a real client and records every call by name."""

    def __init__(self, client, failures=None):
        self._client = client
        self.calls = []
        self.failures = failures if failures is not None else {}

    def count(self, name):
        return sum(1 for call_name, _args, _kwargs in self.calls if call_name == name)

    def __getattr__(self, name):
        method = getattr(self._client, name)

        def record(*args, **kwargs):
            self.calls.append((name, args, kwargs))
            if name in self.failures:
                raise self.failures[name]
            return method(*args, **kwargs)

        return record


@pytest.fixture
def s3_env():
    with mock_aws():
        boto3.client("s3", region_name="us-east-1").create_bucket(Bucket="test-bucket")
        yield


@pytest.fixture
def s3_client(s3_env):
    return S3Client(region_name="us-east-1")


@pytest.fixture
def recording_client(s3_client):
    return RecordingS3Client(s3_client)
