from s3_revision_deploy.interfaces import IRevisionDeployer
from s3_revision_deploy.revisions import fetch_revisions
from zope.interface import implementer

import logging
import mimetypes


logger = logging.getLogger(__name__)


class RevisionDeployError(Exception):
    """Base class for refused upload/activation requests."""

    def __init__(self, message, revision, key):
        super().__init__(message)
        self.revision = revision
        self.key = key


class DuplicateRevisionError(RevisionDeployError):
    """The revision was already uploaded and overwriting is not allowed."""


class RevisionNotFoundError(RevisionDeployError):
    """The revision to activate has not been uploaded."""


@implementer(IRevisionDeployer)
class S3RevisionDeployer:
    """Uploads revisions of an artifact and activates one of them.

    The check for an existing revision and the following write are two
    separate requests; two deploys of the same revision racing each other
    can both pass the check.
    """

    def __init__(self, s3_client):
        self._s3_client = s3_client

    def __repr__(self):
        return f"<S3RevisionDeployer using {self._s3_client!r}>"

    def fetch_revisions(self, descriptor, options):
        return fetch_revisions(
            self._s3_client, options.bucket, descriptor, page_size=options.page_size
        )

    def _has_revision(self, descriptor, options):
        return any(
            record.revision == descriptor.revision_key
            for record in self.fetch_revisions(descriptor, options)
        )

    def upload(self, descriptor, options):
        revision_key = descriptor.revision_object_key
        if self._has_revision(descriptor, options) and not options.allow_overwrite:
            raise DuplicateRevisionError(
                f"Revision {descriptor.revision_key!r} already uploaded to "
                f"{revision_key} (set allow-overwrite to overwrite revisions)",
                descriptor.revision_key,
                revision_key,
            )

        with open(descriptor.file_path, "rb") as f:
            body = f.read()

        self._s3_client.put_object(
            options.bucket,
            revision_key,
            body,
            **self._upload_args(descriptor, options),
        )
        logger.info("Uploaded s3://%s/%s", options.bucket, revision_key)
        message = f"✔  {revision_key}"
        return message

    def _upload_args(self, descriptor, options):
        content_type, _encoding = mimetypes.guess_type(descriptor.file_path)
        extra_args = {
            "ACL": options.acl,
            "ContentType": content_type or options.default_content_type,
            "CacheControl": options.cache_control,
        }
        if options.server_side_encryption:
            extra_args["ServerSideEncryption"] = options.server_side_encryption
        if options.is_gzipped(descriptor.file_pattern):
            extra_args["ContentEncoding"] = "gzip"
        return extra_args

    def activate(self, descriptor, options):
        revision_key = descriptor.revision_object_key
        index_key = descriptor.index_key
        if not self._has_revision(descriptor, options):
            raise RevisionNotFoundError(
                f"Revision {descriptor.revision_key!r} not found at {revision_key}",
                descriptor.revision_key,
                revision_key,
            )

        extra_args = {"ACL": options.acl}
        if options.server_side_encryption:
            extra_args["ServerSideEncryption"] = options.server_side_encryption
        self._s3_client.copy_object(options.bucket, revision_key, index_key, **extra_args)
        logger.info("Activated %s => %s", revision_key, index_key)
        message = f"✔  {revision_key} => {index_key}"
        return message
