from s3_revision_deploy.config import DeployOptions
from s3_revision_deploy.deployer import DuplicateRevisionError
from s3_revision_deploy.deployer import RevisionDeployError
from s3_revision_deploy.deployer import RevisionNotFoundError
from s3_revision_deploy.deployer import S3RevisionDeployer
from s3_revision_deploy.revisions import ArtifactDescriptor
from s3_revision_deploy.revisions import RevisionRecord
from s3_revision_deploy.s3client import S3Client
from s3_revision_deploy.s3client import S3OperationError


__all__ = [
    "ArtifactDescriptor",
    "DeployOptions",
    "DuplicateRevisionError",
    "RevisionDeployError",
    "RevisionNotFoundError",
    "RevisionRecord",
    "S3Client",
    "S3OperationError",
    "S3RevisionDeployer",
]
