"""
Command line interface.

    python -m change_classifier ORIGINAL MODIFIED [--json] [--workers N]
"""

import dataclasses
import json
import sys
from pathlib import Path

from config_logging import (
    get_logger,
    ChangeClassifierError,
    MalformedEditError,
)

logger = get_logger('change_classifier.cli')

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_BAD_INPUT = 2


def _read(path: str) -> str:
    return Path(path).read_text(encoding='utf-8')


def format_text(records) -> str:
    """One line per edit: index, category, before -> after."""
    lines = []
    for record in records:
        edit = record.edit
        lines.append(f"{record.index:>4}  {record.category.value:<12}  {edit.before!r} → {edit.after!r}")
    return "\n".join(lines)


def format_json(records) -> str:
    from .pipeline import category_counts
    return json.dumps({
        'edits': [record.to_dict() for record in records],
        'counts': category_counts(records),
    }, indent=2, ensure_ascii=False)


def build_parser():
    import argparse

    parser = argparse.ArgumentParser(
        prog='change_classifier',
        description='Classify the edits between two versions of a document'
    )
    parser.add_argument('original', help='Path to the original document (UTF-8 text)')
    parser.add_argument('modified', help='Path to the modified document (UTF-8 text)')
    parser.add_argument('--json', action='store_true', help='Print records as JSON')
    parser.add_argument('--workers', type=int, default=None,
                        help='Worker threads (1 runs inline)')
    return parser


def main(argv=None, pipeline=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        original = _read(args.original)
        modified = _read(args.modified)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: cannot read input: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT

    try:
        if pipeline is None:
            from .classifiers import ClassifierSettings
            from .pipeline import ClassificationPipeline
            settings = ClassifierSettings.from_config()
            if args.workers is not None:
                settings = dataclasses.replace(settings, max_workers=max(1, args.workers))
            pipeline = ClassificationPipeline(settings=settings)
        records = pipeline.analyze(original, modified)
    except MalformedEditError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_BAD_INPUT
    except ChangeClassifierError as e:
        logger.error(f"Classification failed: {e.message}", code=e.code)
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_FAILURE

    print(format_json(records) if args.json else format_text(records))
    return EXIT_OK
