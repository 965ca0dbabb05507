from botocore.config import Config
from botocore.exceptions import ClientError
from s3_revision_deploy.interfaces import IS3Client
from zope.interface import implementer

import boto3
import logging


logger = logging.getLogger(__name__)

# Error codes S3 (and compatible stores) use when HEAD finds no object.
_NOT_FOUND_CODES = frozenset({"404", "NotFound", "NoSuchKey"})


class S3OperationError(Exception):
    """A storage request failed for a reason other than a missing object.

    Raised for rejected writes, listings and copies and for HEAD errors
    other than not-found; the botocore error is chained as ``__cause__``.
    """


@implementer(IS3Client)
class S3Client:
    """Thin boto3 wrapper exposing the four calls revision deploys need."""

    def __init__(
        self,
        endpoint_url=None,
        region_name=None,
        aws_access_key_id=None,
        aws_secret_access_key=None,
        use_ssl=True,
        addressing_style="auto",
        connect_timeout=60,
        read_timeout=60,
    ):
        config = Config(
            s3={"addressing_style": addressing_style},
            connect_timeout=connect_timeout,
            read_timeout=read_timeout,
        )

        kwargs = {"config": config}
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url
        if region_name:
            kwargs["region_name"] = region_name
        if aws_access_key_id:
            kwargs["aws_access_key_id"] = aws_access_key_id
        if aws_secret_access_key:
            kwargs["aws_secret_access_key"] = aws_secret_access_key
        kwargs["use_ssl"] = use_ssl
        if not use_ssl:
            logger.warning(
                "S3 SSL is disabled — data and credentials are transmitted in cleartext"
            )

        self._client = boto3.client("s3", **kwargs)

    @classmethod
    def from_config(cls, config):
        """Build a client from a loaded ZConfig deploy section."""
        return cls(
            endpoint_url=config.endpoint_url,
            region_name=config.region,
            aws_access_key_id=config.access_key,
            aws_secret_access_key=config.secret_key,
            use_ssl=config.use_ssl,
            addressing_style=config.addressing_style,
        )

    def _wrap_client_error(self, e, operation, key):
        """Wrap ClientError in a generic error, logging the original at DEBUG."""
        logger.debug("S3 %s failed for key=%s: %s", operation, key, e)
        raise S3OperationError(
            f"S3 {operation} failed for key={key}: "
            f"{e.response['Error'].get('Code', 'Unknown')}"
        ) from e

    def put_object(self, bucket, key, body, **extra_args):
        try:
            return self._client.put_object(
                Bucket=bucket, Key=key, Body=body, **extra_args
            )
        except ClientError as e:
            self._wrap_client_error(e, "put", key)

    def list_objects(self, bucket, prefix, marker=None, max_keys=None):
        params = {"Bucket": bucket, "Prefix": prefix}
        if marker:
            params["Marker"] = marker
        if max_keys:
            params["MaxKeys"] = max_keys
        try:
            response = self._client.list_objects(**params)
        except ClientError as e:
            self._wrap_client_error(e, "list", prefix)
        page = {
            "Contents": response.get("Contents", []),
            "IsTruncated": response.get("IsTruncated", False),
        }
        if response.get("NextMarker"):
            page["NextMarker"] = response["NextMarker"]
        return page

    def head_object(self, bucket, key):
        try:
            return self._client.head_object(Bucket=bucket, Key=key)
        except ClientError as e:
            if e.response["Error"].get("Code") in _NOT_FOUND_CODES:
                return None
            self._wrap_client_error(e, "head", key)

    def copy_object(self, bucket, source_key, key, **extra_args):
        try:
            return self._client.copy_object(
                Bucket=bucket,
                CopySource={"Bucket": bucket, "Key": source_key},
                Key=key,
                **extra_args,
            )
        except ClientError as e:
            self._wrap_client_error(e, "copy", key)
