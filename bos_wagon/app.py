"""
BOS wagon command line

Examples:
  # 列出仓库目录
  bos-wagon --repo bos://bj.bcebos.com/my-bucket/maven ls org/example/

  # 下载 / 上传单个构件
  bos-wagon --repo bos://bj.bcebos.com/my-bucket/maven get org/example/a/1.0/a-1.0.jar ./a-1.0.jar
  bos-wagon --repo bos://bj.bcebos.com/my-bucket/maven put ./a-1.0.jar org/example/a/1.0/a-1.0.jar

  # 上传整个目录到仓库根目录
  bos-wagon --repo bos://bj.bcebos.com/my-bucket/maven put_dir ./target/staging .

Credentials come from --config, BOS_WAGON_CONFIG, config/bos_config.json or
BCE_ACCESS_KEY_ID / BCE_SECRET_ACCESS_KEY.
"""

import argparse
import logging
import os
import sys
from dataclasses import replace
from typing import List, Optional

from .bos.bos_client import connect_bos
from .core.config import load_settings
from .core.exceptions import WagonError
from .core.logger import logger, setup_logging
from .wagon import BosStorageWagon, Repository, RequestType, TransferEvent, TransferListener

REPOSITORY_ENV_VAR = "BOS_WAGON_REPOSITORY"


class ConsoleTransferListener(TransferListener):
    """Prints one line per finished transfer."""

    def __init__(self):
        self._bytes = 0

    def transfer_started(self, event: TransferEvent) -> None:
        self._bytes = 0

    def transfer_progress(self, event: TransferEvent, buffer: bytes, length: int) -> None:
        self._bytes += length

    def transfer_completed(self, event: TransferEvent) -> None:
        verb = "下载" if event.request_type is RequestType.GET else "上传"
        print(f"✓ {verb}: {event.resource.name} ({self._bytes} bytes)")

    def transfer_error(self, event: TransferEvent) -> None:
        print(f"✗ {event.resource.name}: {event.exception}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='bos-wagon',
        description='Artifact repository transfers over Baidu Object Storage',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument(
        '--repo',
        default=os.environ.get(REPOSITORY_ENV_VAR),
        help=f'Repository URL bos://<endpoint>/<bucket>/<base-directory> (default: ${REPOSITORY_ENV_VAR})'
    )
    parser.add_argument('-c', '--config', help='BOS settings JSON file')
    parser.add_argument(
        '--strict',
        action='store_true',
        help='Fail downloads instead of logging a warning'
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')

    subparsers = parser.add_subparsers(dest='command', help='Available commands', required=True)

    parser_ls = subparsers.add_parser('ls', help='List files and folders under a path')
    parser_ls.add_argument('path', nargs='?', default='', help='Repository path (default: root)')

    parser_get = subparsers.add_parser('get', help='Download a resource')
    parser_get.add_argument('resource')
    parser_get.add_argument('destination')

    parser_newer = subparsers.add_parser('get_if_newer', help='Download a resource if it changed')
    parser_newer.add_argument('resource')
    parser_newer.add_argument('destination')
    parser_newer.add_argument(
        '--since',
        type=int,
        default=None,
        help='Epoch milliseconds (default: mtime of destination, or 0)'
    )

    parser_put = subparsers.add_parser('put', help='Upload a file')
    parser_put.add_argument('source')
    parser_put.add_argument('resource')

    parser_put_dir = subparsers.add_parser('put_dir', help='Upload a directory tree')
    parser_put_dir.add_argument('source')
    parser_put_dir.add_argument('destination', nargs='?', default='.')

    parser_exists = subparsers.add_parser('exists', help='Check whether a resource exists')
    parser_exists.add_argument('resource')

    return parser


def _since(args) -> int:
    if args.since is not None:
        return args.since
    if os.path.isfile(args.destination):
        return int(os.path.getmtime(args.destination) * 1000)
    return 0


def run(wagon: BosStorageWagon, args) -> int:
    if args.command == 'ls':
        entries = wagon.get_file_list(args.path)
        for entry in entries:
            print(entry)
        return 0

    elif args.command == 'get':
        wagon.get(args.resource, args.destination)
        return 0

    elif args.command == 'get_if_newer':
        if not wagon.get_if_newer(args.resource, args.destination, _since(args)):
            print(f"{args.resource}: up to date")
        return 0

    elif args.command == 'put':
        wagon.put(args.source, args.resource)
        return 0

    elif args.command == 'put_dir':
        wagon.put_directory(args.source, args.destination)
        return 0

    elif args.command == 'exists':
        found = wagon.resource_exists(args.resource)
        print(f"{args.resource}: {'exists' if found else 'not found'}")
        return 0 if found else 1

    return 2


def main(argv: Optional[List[str]] = None, client_factory=connect_bos) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    if not args.repo:
        parser.error(f"--repo or ${REPOSITORY_ENV_VAR} is required")

    try:
        settings = load_settings(args.config)
        if args.strict:
            settings = replace(settings, strict_download=True)
        logger.kv("Repository", args.repo)
        logger.kv("Endpoint", settings.endpoint)
        logger.kv("Strict", settings.strict_download)

        wagon = BosStorageWagon(settings, client_factory=client_factory)
        wagon.add_transfer_listener(ConsoleTransferListener())
        wagon.connect(Repository('cli', args.repo))
        try:
            return run(wagon, args)
        finally:
            wagon.disconnect()
    except WagonError as e:
        logger.error(f"✗ {e}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
