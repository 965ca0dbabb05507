from zope.interface import Interface


class IS3Client(Interface):
    """Abstraction over S3-compatible object storage."""

    def put_object(bucket, key, body, **extra_args):
        """Write ``body`` to ``key``; extra args are passed as request params."""

    def list_objects(bucket, prefix, marker=None, max_keys=None):
        """Return one listing page: Contents, IsTruncated and maybe NextMarker."""

    def head_object(bucket, key):
        """Return metadata dict for an S3 object, or None if not found."""

    def copy_object(bucket, source_key, key, **extra_args):
        """Server-side copy of ``source_key`` onto ``key`` within ``bucket``."""


class IRevisionDeployer(Interface):
    """Uploads and activates revisions of a single artifact."""

    def fetch_revisions(descriptor, options):
        """Return the revision ledger of the artifact, newest first."""

    def upload(descriptor, options):
        """Upload the artifact file as a new revision object."""

    def activate(descriptor, options):
        """Copy an uploaded revision onto the index key."""
