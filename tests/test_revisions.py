from datetime import datetime
from datetime import timezone
from s3_revision_deploy.revisions import ArtifactDescriptor
from s3_revision_deploy.revisions import fetch_revisions
from s3_revision_deploy.revisions import RevisionRecord
from s3_revision_deploy.s3client import S3OperationError

import pytest


def _ts(second):
    return datetime(2024, 5, 1, 12, 0, second, tzinfo=timezone.utc)


class StaticClient:
    """Single-page listing plus a fixed index object."""

    def __init__(self, contents, current=None, head_error=None):
        self.contents = contents
        self.current = current
        self.head_error = head_error
        self.listed_prefixes = []
        self.probed_keys = []

    def list_objects(self, bucket, prefix, marker=None, max_keys=None):
        self.listed_prefixes.append(prefix)
        return {"Contents": self.contents, "IsTruncated": False}

    def head_object(self, bucket, key):
        self.probed_keys.append(key)
        if self.head_error is not None:
            raise self.head_error
        return self.current


@pytest.fixture
def descriptor():
    return ArtifactDescriptor(
        file_pattern="index.html",
        file_path="dist/index.html",
        revision_key="5",
        prefix="app/",
    )


def _entry(revision, second, etag):
    return {"Key": f"app/index.html:{revision}", "LastModified": _ts(second), "ETag": etag}


class TestDescriptor:
    def test_keys(self, descriptor):
        assert descriptor.index_key == "app/index.html"
        assert descriptor.revision_object_key == "app/index.html:5"
        assert descriptor.revision_prefix == "app/index.html:"


class TestFetchRevisions:
    def test_queries_revision_prefix_and_index_key(self, descriptor):
        client = StaticClient([])
        fetch_revisions(client, "test-bucket", descriptor)
        assert client.listed_prefixes == ["app/index.html:"]
        assert client.probed_keys == ["app/index.html"]

    def test_newest_first(self, descriptor):
        client = StaticClient(
            [_entry("1", 1, '"a"'), _entry("3", 3, '"c"'), _entry("2", 2, '"b"')]
        )
        records = fetch_revisions(client, "test-bucket", descriptor)
        assert [r.revision for r in records] == ["3", "2", "1"]
        assert [r.timestamp for r in records] == [_ts(3), _ts(2), _ts(1)]

    def test_active_matches_index_etag(self, descriptor):
        client = StaticClient(
            [_entry("4", 4, '"d"'), _entry("5", 5, '"e"'), _entry("6", 6, '"f"')],
            current={"ETag": '"e"'},
        )
        records = fetch_revisions(client, "test-bucket", descriptor)
        assert [r for r in records if r.active] == [RevisionRecord("5", _ts(5), True)]

    def test_nothing_active_without_index_object(self, descriptor):
        client = StaticClient([_entry("4", 4, '"d"'), _entry("5", 5, '"e"')])
        records = fetch_revisions(client, "test-bucket", descriptor)
        assert len(records) == 2
        assert not any(r.active for r in records)

    def test_nothing_active_when_index_differs(self, descriptor):
        client = StaticClient([_entry("4", 4, '"d"')], current={"ETag": '"zzz"'})
        records = fetch_revisions(client, "test-bucket", descriptor)
        assert not records[0].active

    def test_single_active_for_identical_content(self, descriptor):
        client = StaticClient(
            [_entry("1", 1, '"same"'), _entry("2", 2, '"same"')],
            current={"ETag": '"same"'},
        )
        records = fetch_revisions(client, "test-bucket", descriptor)
        assert [(r.revision, r.active) for r in records] == [("2", True), ("1", False)]

    def test_head_error_propagates(self, descriptor):
        client = StaticClient(
            [], head_error=S3OperationError("S3 head failed for key=x: 403")
        )
        with pytest.raises(S3OperationError):
            fetch_revisions(client, "test-bucket", descriptor)


class TestFetchRevisionsS3:
    def test_ledger_from_bucket(self, s3_client, descriptor):
        s3_client.put_object("test-bucket", "app/index.html:4", b"four")
        s3_client.put_object("test-bucket", "app/index.html:5", b"five")
        s3_client.put_object("test-bucket", "app/index.html", b"five")
        s3_client.put_object("test-bucket", "app/about.html:5", b"five")

        records = fetch_revisions(s3_client, "test-bucket", descriptor)

        assert sorted(r.revision for r in records) == ["4", "5"]
        assert {r.revision: r.active for r in records} == {"4": False, "5": True}

    def test_empty_bucket(self, s3_client, descriptor):
        assert fetch_revisions(s3_client, "test-bucket", descriptor) == []
