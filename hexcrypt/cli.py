import argparse
import logging
import sys

from hexcrypt.config import Job
from hexcrypt.errors import HexCryptError

logger = logging.getLogger('hexcrypt')


def build_parser():
    parser = argparse.ArgumentParser(prog='hexcrypt', description='Convert UTF-8 text into an RGB image and back')
    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument('-e', '--encrypt', metavar='PATH', help='text file to encode as an image')
    mode.add_argument('-d', '--decrypt', metavar='PATH', help='image to decode back into text')
    parser.add_argument('-o', '--output', metavar='PATH', help='output file (default: input name with .png/.txt)')
    parser.add_argument('-s', '--size', metavar='WxH', help='custom image size, e.g. 16x32')
    parser.add_argument('--keep-tail', action='store_true',
                        help='pad the last 1-2 bytes into a pixel instead of dropping them')
    parser.add_argument('-v', '--verbose', action='store_true', help='debug logging')
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.decrypt is not None and args.size is not None:
        parser.error('argument -s/--size: not allowed with argument -d/--decrypt')
    if args.decrypt is not None and args.keep_tail:
        parser.error('argument --keep-tail: not allowed with argument -d/--decrypt')

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format='%(levelname)s: %(message)s')

    job = Job.from_args(args)
    try:
        written = job.run()
    except HexCryptError as e:
        print(f'Error: {e}', file=sys.stderr)
        return e.exit_code

    logger.debug('Wrote %s', written)
    return 0


if __name__ == '__main__':
    sys.exit(main())
