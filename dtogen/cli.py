"""
Command-line entry point: generate create/update DTOs for every entity of a module.

Usage:
    generate-dto reserva
    generate-dto reservaHotel --src-dir ./src --dry-run --manifest dto-manifest.yaml
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from dtogen.core.config import Settings, settings as default_settings
from dtogen.core.engine import GenerationEngine
from dtogen.core.errors import InvalidModuleName, NoEntityFilesFound
from dtogen.core.logging import configure_logging
from dtogen.generators.dto_gen.manifest import write_manifest
from dtogen.generators.dto_gen.types import DuplicatePolicy

log = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INVALID_MODULE = 1
EXIT_NO_ENTITY_FILES = 2
EXIT_ALL_SKIPPED = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="generate-dto",
        description="Generate NestJS Create/Update DTOs from TypeORM entity files",
    )
    parser.add_argument("module", help="Module name, e.g. reserva or reservaHotel")
    parser.add_argument("--src-dir", help="Source root to search (default: settings src_dir)")
    parser.add_argument("--dry-run", action="store_true", help="Parse and render without writing files")
    parser.add_argument("--manifest", type=Path, help="Write a YAML manifest of the run to this path")
    parser.add_argument("--relations-optional", action="store_true",
                        help="Make relation id fields optional in the create DTO")
    parser.add_argument("--keep-relation-backing-property", action="store_true",
                        help="Also emit the property declared under a relation annotation")
    parser.add_argument("--duplicates", choices=[p.value for p in DuplicatePolicy],
                        help="How repeated field names are resolved")
    parser.add_argument("--exclude", nargs="*", default=None, metavar="FIELD",
                        help="Field names to leave out of the DTOs")
    parser.add_argument("--log-level", help="Logging level (default: settings log_level)")
    return parser


def settings_from_args(args: argparse.Namespace, base: Settings) -> Settings:
    """Overlay command-line flags on the environment settings."""
    updates = {}
    if args.src_dir:
        updates["src_dir"] = args.src_dir
    if args.relations_optional:
        updates["relations_required"] = False
    if args.keep_relation_backing_property:
        updates["skip_relation_backing_property"] = False
    if args.duplicates:
        updates["duplicate_policy"] = DuplicatePolicy(args.duplicates)
    if args.exclude is not None:
        updates["excluded_fields"] = list(args.exclude)
    if args.log_level:
        updates["log_level"] = args.log_level
    return base.model_copy(update=updates)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = settings_from_args(args, default_settings)
    configure_logging(settings.log_level)

    engine = GenerationEngine(settings=settings, dry_run=args.dry_run)
    try:
        report = engine.run(args.module)
    except InvalidModuleName as e:
        log.error("%s. Example: generate-dto reserva", e)
        return EXIT_INVALID_MODULE
    except NoEntityFilesFound as e:
        log.error("%s", e)
        return EXIT_NO_ENTITY_FILES

    if args.manifest:
        write_manifest(report, args.manifest)
        log.info("Manifest written to %s", args.manifest)

    log.info("Generated DTOs for %d entities, skipped %d", len(report.generated), len(report.skipped))
    if not report.ok:
        return EXIT_ALL_SKIPPED
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
