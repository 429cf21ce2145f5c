"""Top-level module for type reports of protobuf descriptor sets."""

from __future__ import annotations

import argparse
import glob
import logging
import os.path

from proto_rbi_types import namespace
from proto_rbi_types.loader import DescriptorLoader, load_descriptor_set
from proto_rbi_types.proto_types import UsageContext
from proto_rbi_types.resolver import TypeResolver

logger = logging.getLogger(__name__)

DESCRIPTOR_SET_SUFFIXES = (".pb", ".binpb", ".desc", ".protoset")


def find_descriptor_sets(
    paths: list[str],
    excludes: list[str],
    root_directory: str,
    recursive: bool = False,
) -> list[str]:
    """Expand paths, directories and glob expressions to descriptor set files.

    Args:
        paths (list[str]): Paths, directories or glob expressions, relative to `root_directory`.
        excludes (list[str]): Paths or glob expressions to exclude from the matches.
        root_directory (str): The directory, from which the tool is executed.
        recursive (bool, optional): Search directories and `**` globs recursively. Defaults to False.

    Returns:
        list[str]: The sorted descriptor set paths.
    """
    excluded_paths: set[str] = set()
    for exclude in excludes:
        exclude_path = os.path.normpath(os.path.join(root_directory, exclude))
        if os.path.isfile(exclude_path):
            excluded_paths.add(exclude_path)
        else:
            excluded_paths = excluded_paths.union(glob.glob(exclude_path, recursive=recursive))

    search_paths: set[str] = set()
    for path in paths:
        search_path = os.path.normpath(os.path.join(root_directory, path))

        if recursive and os.path.isdir(search_path):
            for root, _, files in os.walk(search_path):
                for file in files:
                    if file.endswith(DESCRIPTOR_SET_SUFFIXES):
                        search_paths.add(os.path.join(root, file))
        elif os.path.isdir(search_path):
            for file in os.listdir(search_path):
                file_path = os.path.join(search_path, file)
                if os.path.isfile(file_path) and file.endswith(DESCRIPTOR_SET_SUFFIXES):
                    search_paths.add(file_path)
        else:
            search_paths = search_paths.union(glob.glob(search_path, recursive=recursive))

    return sorted(search_paths - excluded_paths)


def report_types(
    loader: DescriptorLoader,
    contexts: list[UsageContext],
    fail_fast: bool = False,
) -> tuple[list[str], int]:
    """Resolve every field of every loaded message, map entries excluded.

    Args:
        loader (DescriptorLoader): The loader holding all descriptors.
        contexts (list[UsageContext]): The accessors to resolve the fields for.
        fail_fast (bool, optional): Raise on the first unsupported field. Defaults to False.

    Returns:
        tuple[list[str], int]: The report lines and the number of fields that could not be resolved.
    """
    resolver = TypeResolver()
    lines: list[str] = []
    failed_fields: set[tuple[str, str]] = set()

    for message in loader.messages():
        message_name = namespace.qualified_name(message)
        for context in contexts:
            result = resolver.resolve_fields(message.fields, context, fail_fast=fail_fast)
            for field_name, type_name in result.types.items():
                lines.append(f"{message_name}#{field_name} {context.value}: {type_name}")
            failed_fields.update((message_name, error.field.name) for error in result.errors)

    return lines, len(failed_fields)


def run(args: argparse.Namespace, root_directory: str) -> int:
    """Print the resolved types of all fields in a set of descriptor sets.

    Args:
        args (argparse.Namespace): The arguments that were passed when calling the tool.
        root_directory (str): The directory, from which the tool is executed.

    Returns:
        int: Error code, non-zero if any field could not be resolved.
    """
    contexts = [UsageContext(context) for context in args.contexts]
    valid_paths = find_descriptor_sets(args.paths, args.excludes, root_directory, args.recursive)

    if not valid_paths:
        logger.warning("No descriptor sets matched %s", args.paths)
        return 0

    loader = DescriptorLoader()
    for path in valid_paths:
        logger.info(f"Loading descriptor set {path}")
        loader.add_descriptor_set(load_descriptor_set(path))

    lines, failures = report_types(loader, contexts, fail_fast=args.fail_fast)
    for line in lines:
        print(line)

    if failures:
        logger.error(f"{failures} field(s) have unsupported types")
        return 1

    logger.info(f"Resolved {len(lines)} field type(s) in {len(loader.files)} file(s)")
    return 0
