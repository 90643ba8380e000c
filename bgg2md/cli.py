"""
bgg2md - GeekText <-> Markdown Converter

Reads a post from a file or standard input and writes the converted text to
a file or standard output.
"""

import argparse
import sys
import logging

from . import __version__
from .converter_api import BGG_TO_MD, MD_TO_BGG, check_input_size, convert_document, render_html
from .exceptions import Bgg2MdError

logger = logging.getLogger('bgg2md')


def setup_logging(verbose=False, quiet=False):
    """Configure logging based on CLI flags.

    Args:
        verbose: If True, show DEBUG level messages
        quiet: If True, suppress all non-error output
    """
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
    root_logger = logging.getLogger('bgg2md')
    root_logger.setLevel(level)
    root_logger.addHandler(handler)


def parse_meta(pairs):
    """Turn ['key=value', ...] into a dict. Raises Bgg2MdError on a bad pair."""
    meta = {}
    for pair in pairs or []:
        key, sep, value = pair.partition('=')
        if not sep or not key.strip():
            raise Bgg2MdError(f"Expected KEY=VALUE for --meta, got: {pair}")
        meta[key.strip()] = value
    return meta


def read_input(input_file):
    if input_file in (None, '-'):
        text = sys.stdin.read()
    else:
        with open(input_file, 'r', encoding='utf-8') as f:
            text = f.read()

    check_input_size(text)
    return text


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="bgg2md",
        description="Convert BoardGameGeek GeekText to Markdown and back.",
        epilog="Examples:\n"
               "  bgg2md post.bgg -o post.md\n"
               "  bgg2md --from md < post.md > post.bgg\n"
               "  bgg2md post.bgg --meta title='Session report' -o post.md\n"
               "  bgg2md post.bgg --html -o preview.html",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument("input_file", nargs="?", default=None,
                        help="Input file (default: standard input)")
    parser.add_argument("-o", "--output", default=None,
                        help="Output file (default: standard output)")
    parser.add_argument("--from", dest="source", default="bgg",
                        help="Source dialect: 'bgg' (default) or 'md'")
    parser.add_argument("--meta", action="append", default=[], metavar="KEY=VALUE",
                        help="Front matter entry for Markdown output (repeatable)")
    parser.add_argument("--html", action="store_true", default=False,
                        help="Write an HTML preview of the Markdown output instead")
    parser.add_argument("-v", "--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--verbose", action="store_true", default=False,
                        help="Show detailed debug output")
    parser.add_argument("-q", "--quiet", action="store_true", default=False,
                        help="Suppress all non-error output")

    args = parser.parse_args(argv)

    # Set up logging
    setup_logging(verbose=args.verbose, quiet=args.quiet)

    direction = BGG_TO_MD if args.source == "bgg" else MD_TO_BGG
    if args.source not in ("bgg", "md"):
        logger.warning("Unknown source dialect %r, reading input as Markdown", args.source)

    if args.html and direction != BGG_TO_MD:
        logger.error("--html is only available when converting from bgg")
        sys.exit(1)

    try:
        metadata = parse_meta(args.meta)
        text = read_input(args.input_file)
        result = convert_document(text, direction, metadata=None if args.html else metadata)

        output = render_html(result.text) if args.html else result.text
        if args.output:
            with open(args.output, 'w', encoding='utf-8') as f:
                f.write(output)
            logger.info("Successfully converted to %s", args.output)
        else:
            sys.stdout.write(output)

    except Bgg2MdError as e:
        logger.error("%s", e)
        sys.exit(1)
    except OSError as e:
        logger.error("%s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
