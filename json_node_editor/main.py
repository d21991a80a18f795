"""Command line entry point for JSON Node Editor."""

import argparse
import sys
from typing import List, Optional

from pydantic import ValidationError

from .config import ConfigurationError, EditorConfig, load_config
from .models.core import JsonPath
from .models.errors import JSONEditorException
from .services import EditSession, FileDocumentStore, InMemoryMirrorStore, PathFormatter
from .utils.error_handler import format_error_message, handle_error
from .utils.logging_config import get_logger, setup_logging

EXIT_OK = 0
EXIT_REJECTED = 1
EXIT_USAGE = 2
EXIT_INTERNAL = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="json-node-editor",
        description="View and edit values inside a JSON document by path."
    )
    parser.add_argument("--config", help="YAML configuration file (default: config.yaml)")
    parser.add_argument("--log-level", help="Override the configured log level")

    commands = parser.add_subparsers(dest="command", required=True)

    show = commands.add_parser("show", help="Print the value at a path")
    show.add_argument("file", help="JSON document")
    show.add_argument("--path", default="[]", help='Path as a JSON array, e.g. \'["items", 0]\'')

    path = commands.add_parser("path", help="Print the display form of a path")
    path.add_argument("path", help='Path as a JSON array, e.g. \'["items", 0]\'')

    set_ = commands.add_parser("set", help="Replace the value at a path")
    set_.add_argument("file", help="JSON document, rewritten in place")
    set_.add_argument("--path", required=True, help='Path as a JSON array, e.g. \'["items", 0]\'')
    set_.add_argument("--value", required=True, help="New value as JSON text")

    return parser


def _session_for(file: str, path: JsonPath, config: EditorConfig) -> EditSession:
    session = EditSession(FileDocumentStore(file), InMemoryMirrorStore(), config=config)
    session.select(path)
    return session


def run(args: argparse.Namespace, config: EditorConfig) -> int:
    logger = get_logger(__name__)
    path = JsonPath.from_json(args.path)

    if args.command == "path":
        print(PathFormatter(escape_keys=config.escape_path_keys).format(path))
        return EXIT_OK

    session = _session_for(args.file, path, config)

    if args.command == "show":
        print(session.view_text)
        return EXIT_OK

    session.begin_edit()
    session.update_draft(args.value)
    if not session.save():
        logger.warning("set_rejected", file=args.file, path=session.path_text)
        print(f"error: {session.error}", file=sys.stderr)
        return EXIT_REJECTED

    print(session.draft_text)
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """Run the CLI and return its exit status."""
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config)
        if args.log_level:
            config.log_level = args.log_level
    except (ConfigurationError, ValidationError) as e:
        print(f"error: {format_error_message(e)}", file=sys.stderr)
        return EXIT_USAGE

    setup_logging(config.log_level, json_logs=config.json_logs)
    logger = get_logger(__name__)

    try:
        return run(args, config)
    except JSONEditorException as e:
        print(f"error: {format_error_message(e)}", file=sys.stderr)
        return EXIT_USAGE
    except (OSError, UnicodeDecodeError) as e:
        logger.error("document_unreadable", file=getattr(args, "file", None), error=str(e))
        print(f"error: {e}", file=sys.stderr)
        return EXIT_USAGE
    except KeyboardInterrupt:
        logger.info("Interrupted")
        return EXIT_REJECTED
    except Exception as e:
        response = handle_error(e)
        print(f"error: {response.message} [{response.details['error_id']}]", file=sys.stderr)
        return EXIT_INTERNAL


if __name__ == "__main__":
    sys.exit(main())
