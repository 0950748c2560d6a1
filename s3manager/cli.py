#!/usr/bin/env python3
"""
Command line front end for the storage facade.

Configuration comes from the environment (or a .env file):
AWS_ACCESS_KEY_ID, AWS_SECRET_ACCESS_KEY, AWS_REGION, AWS_DEFAULT_BUCKET,
APP_CONFIG_FOLDER.

Usage:
    s3manager init
    s3manager upload path/to/file.json remote/key.json
    s3manager download remote/key.json [--output local.json]
    s3manager list [--bucket other-bucket]
    s3manager delete remote/key.json
"""

import argparse
import logging
import sys

from s3manager.core.logging import setup_logging
from s3manager.errors import S3ManagerError
from s3manager.facade import StorageFacade
from s3manager.storage.factory import build_facade

logger = logging.getLogger("s3manager")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="s3manager", description="Object storage helper")
    parser.add_argument("--log-level", default=None, help="Logging level (default: $LOG_LEVEL or INFO)")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init", help="Create the config folder and the bucket if missing")

    upload = sub.add_parser("upload", help="Upload a local file")
    upload.add_argument("source", help="Local file to upload")
    upload.add_argument("key", help="Destination object key")

    download = sub.add_parser("download", help="Download an object into the config folder")
    download.add_argument("key", help="Object key")
    download.add_argument("--output", "-o", default=None, help="Write here instead of the config folder")

    listing = sub.add_parser("list", help="List objects in a bucket")
    listing.add_argument("--bucket", default=None, help="Bucket to list (default: AWS_DEFAULT_BUCKET)")

    delete = sub.add_parser("delete", help="Delete an object and its local mirror")
    delete.add_argument("key", help="Object key")

    return parser


def run_command(facade: StorageFacade, args: argparse.Namespace) -> None:
    """Dispatch one parsed command against ``facade``."""
    if args.command == "init":
        facade.initialize()
        print(f"Bucket {facade.bucket_name} ready, mirror folder {facade.config_folder}")
    elif args.command == "upload":
        location = facade.upload(args.source, args.key)
        print(location)
    elif args.command == "download":
        path = facade.download(args.key, args.output)
        print(path)
    elif args.command == "list":
        for ref in facade.list_objects(args.bucket or facade.bucket_name):
            print(ref.key)
    elif args.command == "delete":
        removed = facade.delete(args.key)
        suffix = " (local mirror removed)" if removed else ""
        print(f"Deleted {args.key}{suffix}")


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        facade = build_facade()
        run_command(facade, args)
    except S3ManagerError as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
