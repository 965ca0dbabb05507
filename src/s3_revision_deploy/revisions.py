"""Revision ledger of one artifact.

The ledger is rebuilt from the bucket on every call: all objects under the
revision prefix are listed while the index key is probed, and the revision
whose ETag matches the index object is flagged as active.
"""

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from s3_revision_deploy import keys
from s3_revision_deploy.listing import list_all_objects

import dataclasses
import logging


logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class ArtifactDescriptor:
    """One deployable file and the revision it is deployed under."""

    file_pattern: str
    file_path: str
    revision_key: str
    prefix: str = ""

    @property
    def index_key(self) -> str:
        return keys.build_index_key(self.prefix, self.file_pattern)

    @property
    def revision_object_key(self) -> str:
        return keys.build_revision_key(
            self.prefix, self.file_pattern, self.revision_key
        )

    @property
    def revision_prefix(self) -> str:
        return keys.build_revision_prefix(self.prefix, self.file_pattern)


@dataclasses.dataclass(frozen=True)
class RevisionRecord:
    revision: str
    timestamp: datetime
    active: bool = False


def fetch_revisions(client, bucket, descriptor, page_size=None):
    """Return the revisions of ``descriptor``'s artifact, newest first.

    A missing index object is not an error: it means no revision has been
    activated yet and every record comes back inactive. When several
    revisions share the index ETag, only the newest of them is active.
    """
    revision_prefix = descriptor.revision_prefix
    with ThreadPoolExecutor(max_workers=2) as executor:
        listed = executor.submit(
            list_all_objects, client, bucket, revision_prefix, page_size
        )
        probed = executor.submit(client.head_object, bucket, descriptor.index_key)
        objects = listed.result()
        current = probed.result()

    if current is None:
        logger.debug("Nothing active at s3://%s/%s", bucket, descriptor.index_key)
    current_etag = current["ETag"] if current else None

    objects = sorted(objects, key=lambda obj: obj.last_modified, reverse=True)
    records = []
    found_active = False
    for obj in objects:
        active = (
            not found_active
            and current_etag is not None
            and obj.etag == current_etag
        )
        found_active = found_active or active
        records.append(
            RevisionRecord(
                revision=keys.revision_from_key(obj.key, revision_prefix),
                timestamp=obj.last_modified,
                active=active,
            )
        )
    return records
