from datetime import datetime
from s3_revision_deploy.s3client import S3OperationError

import dataclasses
import logging


logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class ObjectMetadata:
    key: str
    last_modified: datetime
    etag: str

    @classmethod
    def from_listing(cls, item):
        """Build from a ``Contents`` entry of a ListObjects response."""
        return cls(
            key=item["Key"], last_modified=item["LastModified"], etag=item["ETag"]
        )


def _next_marker(page):
    """Marker for the page after ``page``.

    Plain ``ListObjects`` only returns ``NextMarker`` when a delimiter is
    given, so fall back to the key of the last listed object.
    """
    if page.get("NextMarker"):
        return page["NextMarker"]
    if not page["Contents"]:
        raise S3OperationError(
            "S3 list returned a truncated page without objects or NextMarker"
        )
    return page["Contents"][-1]["Key"]


def list_all_objects(client, bucket, prefix, page_size=None):
    """Return every object under ``prefix``, following truncated listings.

    Pages are requested one after the other because each marker depends on
    the previous response. Errors propagate; nothing is returned partially.
    """
    objects = []
    marker = None
    while True:
        logger.debug("Listing s3://%s/%s (marker=%s)", bucket, prefix, marker)
        page = client.list_objects(bucket, prefix, marker=marker, max_keys=page_size)
        objects.extend(ObjectMetadata.from_listing(item) for item in page["Contents"])
        if not page.get("IsTruncated"):
            return objects
        marker = _next_marker(page)
