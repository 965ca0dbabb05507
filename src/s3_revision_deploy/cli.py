"""Command line entry point: s3-revision-deploy."""

from s3_revision_deploy.config import DeployOptions
from s3_revision_deploy.config import load_config
from s3_revision_deploy.deployer import RevisionDeployError
from s3_revision_deploy.deployer import S3RevisionDeployer
from s3_revision_deploy.revisions import ArtifactDescriptor
from s3_revision_deploy.s3client import S3Client
from s3_revision_deploy.s3client import S3OperationError

import argparse
import logging
import os
import sys
import ZConfig


logger = logging.getLogger(__name__)


def _descriptor(args, config):
    file_path = getattr(args, "file_path", None) or ""
    pattern = args.pattern or os.path.basename(file_path)
    return ArtifactDescriptor(
        file_pattern=pattern,
        file_path=file_path,
        revision_key=getattr(args, "revision", None) or "",
        prefix=config.prefix or "",
    )


def upload(deployer, args, config):
    overrides = {"allow_overwrite": True} if args.allow_overwrite else {}
    options = DeployOptions.from_config(config, **overrides)
    print(deployer.upload(_descriptor(args, config), options))


def activate(deployer, args, config):
    options = DeployOptions.from_config(config)
    print(deployer.activate(_descriptor(args, config), options))


def list_revisions(deployer, args, config):
    options = DeployOptions.from_config(config)
    for record in deployer.fetch_revisions(_descriptor(args, config), options):
        marker = "*" if record.active else " "
        print(f"{marker} {record.revision}\t{record.timestamp.isoformat()}")


def build_parser():
    parser = argparse.ArgumentParser(
        prog="s3-revision-deploy",
        description="Upload revisions of a file to S3 and activate one of them.",
    )
    parser.add_argument("--config", required=True, help="ZConfig deploy file")
    parser.add_argument("--verbose", action="store_true", help="Log at DEBUG")

    subparsers = parser.add_subparsers(dest="command", required=True)

    upload_parser = subparsers.add_parser("upload", help="Upload a new revision")
    upload_parser.add_argument("file_path", help="Local file to upload")
    upload_parser.add_argument("--revision", required=True)
    upload_parser.add_argument(
        "--pattern", help="Key name of the artifact (default: file name)"
    )
    upload_parser.add_argument("--allow-overwrite", action="store_true")
    upload_parser.set_defaults(func=upload)

    activate_parser = subparsers.add_parser(
        "activate", help="Make an uploaded revision the live object"
    )
    activate_parser.add_argument("--revision", required=True)
    activate_parser.add_argument("--pattern", required=True)
    activate_parser.set_defaults(func=activate)

    list_parser = subparsers.add_parser("list", help="List revisions, newest first")
    list_parser.add_argument("--pattern", required=True)
    list_parser.set_defaults(func=list_revisions)

    return parser


def main(argv=None, s3_client=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        config = load_config(args.config)
        deployer = S3RevisionDeployer(s3_client or S3Client.from_config(config))
        args.func(deployer, args, config)
    except (
        RevisionDeployError,
        S3OperationError,
        ZConfig.ConfigurationError,
        OSError,
    ) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
