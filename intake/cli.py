"""
Outreach Intake command line

Usage:
    intake organizations FILE [--map COLUMN=FIELD ...] [--dry-run]
    intake contacts FILE [--map COLUMN=FIELD ...] [--concurrency N] [--store json]
    intake fields {organizations|contacts}
    intake config
    intake version
"""

import argparse
import asyncio
import sys
from typing import List, Optional, Tuple

from core import __version__
from core.config import STORE_BACKENDS, get_config
from core.errors import IntakeError, MappingIncomplete
from core.log import setup_logging
from .banner import (
    console, create_progress, show_banner, show_catalog, show_config_status, show_error,
    show_info, show_issues, show_mapping_table, show_outcome_summary, show_step,
    show_success, show_warning,
)
from .exporters import CSVExporter
from .pipelines import PIPELINES, get_pipeline
from .session import ImportSession
from .stores import create_store


def parse_override(value: str) -> Tuple[str, str]:
    """'COLUMN=FIELD' -> (column, field); the column may itself contain '='."""
    column, sep, field_key = value.rpartition('=')
    if not sep or not column.strip() or not field_key.strip():
        raise argparse.ArgumentTypeError(f"expected COLUMN=FIELD, got '{value}'")
    return column.strip(), field_key.strip()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='intake',
        description='Import provider CSV exports as outreach organizations and contact leads'
    )
    parser.add_argument('--log-level', help='Override INTAKE_LOG_LEVEL')
    commands = parser.add_subparsers(dest='command')

    for name in PIPELINES:
        command = commands.add_parser(name, help=f'Import {name} from a CSV file')
        command.add_argument('file', help='Path to the CSV export')
        command.add_argument(
            '--map',
            dest='overrides',
            action='append',
            type=parse_override,
            default=[],
            metavar='COLUMN=FIELD',
            help="Override a column's field (header text or index; FIELD may be 'skip')"
        )
        command.add_argument('--encoding', help='Force the file encoding')
        command.add_argument('--concurrency', type=int, help='Worker count (default: INTAKE_CONCURRENCY)')
        command.add_argument('--store', choices=STORE_BACKENDS, help='Persistence backend (default: INTAKE_STORE)')
        command.add_argument(
            '--dry-run',
            action='store_true',
            help='Map and normalize only; nothing is persisted'
        )
        command.add_argument('--report', metavar='PATH', help='Write per-row issues (or dry-run records) to CSV')

    fields = commands.add_parser('fields', help='List the target fields of a catalog')
    fields.add_argument('catalog', choices=list(PIPELINES))

    commands.add_parser('config', help='Show configuration status')
    commands.add_parser('version', help='Show version')
    return parser


def run_import(args: argparse.Namespace) -> int:
    config = get_config()
    pipeline = get_pipeline(args.command, config)

    show_step(1, "Load", args.file)
    session = ImportSession.from_file(pipeline, args.file, encoding=args.encoding)
    show_success(f"{session.table.row_count} rows, {session.table.column_count} columns")

    show_step(2, "Map columns")
    for column, field_key in args.overrides:
        session.override(column, field_key)
    show_mapping_table(session.table, session.mapping)
    confidence = session.mapper.get_mapping_confidence(session.mapping)
    show_info(f"Mapping confidence: {confidence:.0%}")

    missing = session.missing_required()
    if missing:
        raise MappingIncomplete(missing)

    exporter = CSVExporter()

    if args.dry_run:
        show_step(3, "Normalize", "dry run, nothing is persisted")
        outcome = session.preview()
        show_success(f"{len(session.records)} rows ready to import")
        if outcome.skipped_incomplete:
            show_warning(f"{outcome.skipped_incomplete} rows miss required fields")
        show_issues(outcome.issues)
        if args.report:
            count = exporter.export_records(session.records, pipeline.report_columns(), args.report)
            show_success(f"{count} normalized records written to {args.report}")
        return 0

    store = create_store(config, args.store)
    concurrency = args.concurrency if args.concurrency else config.concurrency

    show_step(3, "Import", f"{store.__class__.__name__}, {concurrency} worker(s)")
    with create_progress() as progress:
        task = progress.add_task(f"Importing {pipeline.name}...", total=100)
        outcome = asyncio.run(session.execute(
            store,
            concurrency=concurrency,
            on_progress=lambda percent: progress.update(task, completed=percent),
        ))
        progress.update(task, completed=100)

    show_outcome_summary(outcome.as_dict())
    show_issues(outcome.issues)

    if args.report and outcome.issues:
        count = exporter.export_issues(outcome.issues, args.report)
        show_info(f"{count} issues written to {args.report}")

    return 1 if outcome.errors else 0


def show_fields(catalog_name: str) -> None:
    catalog = PIPELINES[catalog_name].catalog
    rows = []
    for spec in catalog:
        required = '✓' if spec.required else ''
        if spec.key in catalog.alternatives:
            required = f"✓ (or {' + '.join(catalog.alternatives[spec.key])})"
        rows.append((spec.key, spec.label, spec.category, required, spec.kind))
    show_catalog(f"{catalog_name} fields ({len(catalog)})", rows)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    config = get_config()
    setup_logging(args.log_level or config.log_level, console)

    if args.command == 'version':
        console.print(f"Outreach Intake v{__version__}")
        return 0

    if args.command == 'config':
        show_config_status(config.get_config_status())
        return 0

    if args.command == 'fields':
        show_fields(args.catalog)
        return 0

    if args.command not in PIPELINES:
        show_banner()
        parser.print_help()
        return 0

    try:
        return run_import(args)
    except MappingIncomplete as exc:
        show_error(str(exc))
        show_info("Use --map COLUMN=FIELD to assign the missing fields")
        return 2
    except (IntakeError, FileNotFoundError) as exc:
        show_error(str(exc))
        return 2


if __name__ == '__main__':
    sys.exit(main())
