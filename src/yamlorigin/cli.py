"""Print the flattened properties of YAML files together with their origins."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from yamlorigin import __version__
from yamlorigin.models.errors import YamlLoadError
from yamlorigin.models.origin import OriginTrackedValue
from yamlorigin.parser.loader import OriginTrackedYamlLoader
from yamlorigin.resource import FileResource
from yamlorigin.settings import LoaderSettings

logger = logging.getLogger("yamlorigin.cli")

EXIT_LOAD_ERROR = 1
EXIT_KEY_NOT_FOUND = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="yamlorigin",
        description="Flatten YAML files into properties and show where each value came from",
    )
    parser.add_argument("files", nargs="+", type=Path, help="YAML files to load")
    parser.add_argument("-k", "--key", help="Only print this flattened key")
    parser.add_argument(
        "-f",
        "--format",
        choices=["properties", "json"],
        default="properties",
        help="Output format (default: properties)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _format_property(key: str, value: Any) -> str:
    if isinstance(value, OriginTrackedValue):
        return f"{key}={value}  # {value.origin}"
    return f"{key}={value!r}"


def _as_json(document: dict[str, Any]) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for key, value in document.items():
        if isinstance(value, OriginTrackedValue):
            result[key] = {
                "value": value.value,
                "resource": value.origin.resource,
                "line": value.origin.line,
                "column": value.origin.column,
            }
        else:
            result[key] = {"value": list(value) if isinstance(value, Sequence) else {}}
    return result


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line interface; returns the process exit status."""
    args = _build_parser().parse_args(argv)
    settings = LoaderSettings()
    logging.basicConfig(level=settings.log_level.upper())

    documents: list[dict[str, Any]] = []
    for path in args.files:
        loader = OriginTrackedYamlLoader(FileResource(path), settings)
        try:
            documents.extend(loader.load())
        except YamlLoadError as exc:
            print(f"{exc.code}: {exc}", file=sys.stderr)
            return EXIT_LOAD_ERROR
        logger.info("Loaded %s", loader.resource.description)

    if args.key is not None:
        documents = [{args.key: doc[args.key]} for doc in documents if args.key in doc]
        if not documents:
            print(f"Key '{args.key}' not found", file=sys.stderr)
            return EXIT_KEY_NOT_FOUND

    if args.format == "json":
        print(json.dumps([_as_json(doc) for doc in documents], indent=2, default=str))
    else:
        for index, document in enumerate(documents):
            if index:
                print("---")
            for key, value in document.items():
                print(_format_property(key, value))
    return 0


if __name__ == "__main__":
    sys.exit(main())
