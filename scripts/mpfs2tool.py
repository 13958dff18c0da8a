#!/usr/bin/env python3
'''
Build, list and extract MPFS2 images.

 $ mpfs2tool.py pack -t '2024-01-01 00:00' www/ www.bin
 $ mpfs2tool.py list www.bin
 $ mpfs2tool.py extract www.bin out/

Files ending with ".gz" are stored without the suffix and marked as
compressed, the suffix is restored when extracting.
'''
import argparse
import logging
import os
import sys

from mpfs2 import decode, encode, DEFAULT_SIZE_LIMIT, MPFSException
from mpfs2.tools import (
    collect_records,
    format_listing,
    parse_timestamp,
    write_tree,
)


logger = logging.getLogger(__name__)


def read_image(path, size_limit):
    with open(path, 'rb') as f:
        return decode(f.read(), size_limit=size_limit)


def cmd_pack(args):
    timestamp = parse_timestamp(args.timestamp) if args.timestamp else None
    records = collect_records(args.directory, timestamp=timestamp)

    if not records:
        logger.error(f'no files found in \'{args.directory}\'')
        return 1

    data = encode(records, size_limit=args.size_limit)

    with open(args.image, 'wb') as f:
        f.write(data)

    logger.info(f'written {len(records)} files ({len(data)} bytes) to \'{args.image}\'')

    return 0


def cmd_list(args):
    for line in format_listing(read_image(args.image, args.size_limit)):
        print(line)

    return 0


def cmd_extract(args):
    paths = write_tree(read_image(args.image, args.size_limit), args.directory)

    logger.info(f'extracted {len(paths)} files to \'{args.directory}\'')

    return 0


def build_parser():
    parser = argparse.ArgumentParser(description='Build, list and extract MPFS2 images')
    subparsers = parser.add_subparsers(dest='command', required=True)

    p = subparsers.add_parser('pack', help='build an image from a directory')
    p.add_argument('-t', '--timestamp', help='force the timestamp of every file (epoch seconds or UTC date)')
    p.add_argument('directory')
    p.add_argument('image')
    p.set_defaults(func=cmd_pack)

    p = subparsers.add_parser('list', help='show the files of an image')
    p.add_argument('image')
    p.set_defaults(func=cmd_list)

    p = subparsers.add_parser('extract', help='write the files of an image into a directory')
    p.add_argument('image')
    p.add_argument('directory')
    p.set_defaults(func=cmd_extract)

    for p in subparsers.choices.values():
        p.add_argument('-s', '--size-limit', type=int, default=DEFAULT_SIZE_LIMIT,
                       help='maximum size in bytes of the image (default: %(default)s)')

    return parser


def main(argv=None):
    logging.basicConfig(level=logging.DEBUG if 'DEBUG' in os.environ else logging.INFO)

    args = build_parser().parse_args(argv)

    try:
        return args.func(args)
    except (MPFSException, ValueError, OSError) as e:
        logger.error(e)
        return 1


if __name__ == '__main__':
    sys.exit(main())
