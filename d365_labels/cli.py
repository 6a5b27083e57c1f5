"""CLI for d365-labels."""

import argparse
import json
import logging
import sys

from d365_labels.config import LabelConfig
from d365_labels.domain.enums import LabelStatus
from d365_labels.resolution.label_resolver import LabelResolver

EXIT_NOT_FOUND = 1
EXIT_NOT_CONFIGURED = 2


def _print_json(data) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='d365-labels', description='D365 F&O label lookup')
    parser.add_argument('--packages-dir', help='PackagesLocalDirectory root (default: $D365_PACKAGES_DIR)')
    parser.add_argument('--language', help='Label language (default: $D365_LABEL_LANGUAGE or en-US)')
    parser.add_argument('-v', '--verbose', action='store_true', help='Log lookups to stderr')
    subparsers = parser.add_subparsers(dest='command')

    get_parser = subparsers.add_parser('get', help='Resolve a single label reference')
    get_parser.add_argument('reference', help='Label reference, e.g. @SYS:Company')
    get_parser.add_argument('--description', action='store_true', help='Include the label description')

    batch_parser = subparsers.add_parser('batch', help='Resolve several label references')
    batch_parser.add_argument('references', nargs='+', help='Label references')

    languages_parser = subparsers.add_parser('languages', help='List languages of a label file')
    languages_parser.add_argument('package')
    languages_parser.add_argument('model')
    languages_parser.add_argument('file_id', help='Label file id, e.g. SYS')

    files_parser = subparsers.add_parser('files', help='List label files of a model')
    files_parser.add_argument('package')
    files_parser.add_argument('model')

    return parser


def run(argv: list[str] | None = None) -> int:
    """Run the CLI and return the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.ERROR,
        format='%(levelname)s %(name)s: %(message)s',
        stream=sys.stderr,
    )

    if not args.command:
        parser.print_help()
        return 0

    config = LabelConfig.from_env(packages_dir=args.packages_dir)
    if args.language:
        config.default_language = args.language
    resolver = LabelResolver(config)

    if args.command == 'get':
        result = resolver.resolve_one(args.reference)
        _print_json(result.to_dict(include_description=args.description))
        if result.status is LabelStatus.NOT_CONFIGURED:
            return EXIT_NOT_CONFIGURED
        return 0 if result.found else EXIT_NOT_FOUND

    if args.command == 'batch':
        batch = resolver.resolve_batch(args.references)
        _print_json(batch.to_dict(args.references))
        return EXIT_NOT_CONFIGURED if batch.error else 0

    if args.command == 'languages':
        listing = resolver.list_available_languages(args.package, args.model, args.file_id)
    else:
        listing = resolver.list_available_label_files(args.package, args.model)

    if listing.error:
        print(f"Error: {listing.error}", file=sys.stderr)
        return EXIT_NOT_CONFIGURED
    for item in listing.items:
        print(item)
    return 0


def main():
    sys.exit(run())


if __name__ == '__main__':
    main()
