"""Tools for decoding Bar-Coded Boarding Passes."""

# Standard imports
import argparse
import logging

# Third-party imports
from dotenv import load_dotenv

# Project imports
import pbbcbp.tools as bt
from pbbcbp.options import DecoderOptions

def _options(args) -> DecoderOptions:
    """Builds decoder options from the environment and CLI flags."""
    options = DecoderOptions.from_env()
    changes = {}
    if args.no_trim_whitespace:
        changes['trim_whitespace'] = False
    if args.no_trim_leading_zeros:
        changes['trim_leading_zeros'] = False
    if args.keep_empty_strings:
        changes['empty_string_is_nil'] = False
    if args.drain_bag_tag_padding:
        changes['drain_bag_tag_padding'] = True
    if args.prevalidate:
        changes['prevalidate'] = True
    if args.trace:
        changes['trace_enabled'] = True
    return options.replace(**changes)

if __name__ == "__main__":
    # Load environment variables from .env file.
    load_dotenv()

    parser = argparse.ArgumentParser(
        description="Tools for decoding Bar-Coded Boarding Passes."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # decode
    decode_parser = subparsers.add_parser(
        "decode",
        help="Decode boarding pass data",
    )
    decode_source_group = decode_parser.add_mutually_exclusive_group(
        required=True,
    )
    decode_source_group.add_argument("--bcbp",
        help="Decode a BCBP-coded text string",
        metavar="BCBP_TEXT",
        type=str,
    )
    decode_source_group.add_argument("--pkpasses",
        action="store_true",
        help="Decode .pkpass files in the import folder",
    )
    decode_parser.add_argument("--no-trim-whitespace",
        action="store_true",
        help="Keep leading and trailing spaces in fields",
    )
    decode_parser.add_argument("--no-trim-leading-zeros",
        action="store_true",
        help="Keep leading zeros in flight and seat numbers",
    )
    decode_parser.add_argument("--keep-empty-strings",
        action="store_true",
        help="Return empty optional fields as empty strings",
    )
    decode_parser.add_argument("--drain-bag-tag-padding",
        action="store_true",
        help="Discard characters after the bag tags instead of failing",
    )
    decode_parser.add_argument("--prevalidate",
        action="store_true",
        help="Validate the mandatory fields before decoding",
    )
    decode_parser.add_argument("--trace",
        action="store_true",
        help="Log every field read",
    )

    # validate
    validate_parser = subparsers.add_parser(
        "validate",
        help="Validate the mandatory fields of boarding pass data",
    )
    validate_parser.add_argument("--bcbp",
        help="Validate a BCBP-coded text string",
        metavar="BCBP_TEXT",
        required=True,
        type=str,
    )

    # Parse arguments
    args = parser.parse_args()
    if args.command == "decode":
        decoder_options = _options(args)
        if decoder_options.trace_enabled:
            logging.basicConfig(level=logging.DEBUG)
        if args.bcbp is not None:
            bt.decode_bcbp(args.bcbp, decoder_options)
        elif args.pkpasses:
            bt.decode_pkpasses(decoder_options)
    elif args.command == "validate":
        bt.validate_bcbp(args.bcbp)
