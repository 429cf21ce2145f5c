"""Command-line interface for inspecting Sorbet types of protobuf fields.

Notes:
    - Inputs are binary descriptor sets, e.g. from `protoc --include_imports --descriptor_set_out=out.pb`.
"""

from __future__ import annotations

import argparse
import logging
import os.path
from collections.abc import Sequence

from proto_rbi_types.errors import ProtoRbiTypesError
from proto_rbi_types.proto_types import UsageContext
from proto_rbi_types.run import run

logger = logging.getLogger(__name__)


def _add_recursive_argument(parser: argparse.ArgumentParser):
    """Add a recursive argument to a parser.

    Args:
        parser (argparse.ArgumentParser): The parser to add the argument to.
    """
    parser.add_argument(
        "-r",
        "--recursive",
        dest="recursive",
        default=False,
        action="store_true",
        help="recursively search for descriptor sets with a given glob expression.",
    )


def setup_parser() -> argparse.ArgumentParser:
    """Setup for the parser.

    Returns:
        argparse.ArgumentParser: The parser after setup.
    """
    parser = argparse.ArgumentParser(description="Resolve Sorbet types of protobuf fields in descriptor sets.")

    parser.add_argument(
        "-d",
        "--descriptor-sets",
        dest="paths",
        type=str,
        nargs="+",
        default=["**/*.pb"],
        help="path or glob expressions that match binary descriptor sets.",
    )

    parser.add_argument(
        "-e",
        "--excludes",
        type=str,
        nargs="+",
        default=[],
        help="path or glob expressions to exclude from path matches.",
    )

    parser.add_argument(
        "-c",
        "--contexts",
        type=str,
        nargs="+",
        choices=[context.value for context in UsageContext],
        default=[context.value for context in UsageContext],
        help="accessors to resolve the field types for.",
    )

    parser.add_argument(
        "--fail-fast",
        dest="fail_fast",
        default=False,
        action="store_true",
        help="stop at the first field with an unsupported type.",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        dest="verbose",
        default=False,
        action="store_true",
        help="log every resolved field.",
    )

    _add_recursive_argument(parser)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point of the type report.

    Args:
        argv (Sequence[str] | None, optional): Run arguments. Defaults to None.

    Returns:
        int: Error code.
    """
    parser = setup_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    root_directory = os.getcwd()
    logging.info("Working from root directory: %s", root_directory)

    try:
        return run(args, root_directory)
    except ProtoRbiTypesError as e:
        logger.error(str(e))
        return 1
