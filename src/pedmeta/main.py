"""
Command line interface for pedmeta.

Usage:
    pedmeta list
    pedmeta describe A_M_Y_STLAT_02 --variant 4=12:0 --categories "RaceSex|Clothing"
    pedmeta describe A_M_Y_STLAT_02 --variant 4=12:0 --audio
    pedmeta demo
"""

import argparse
import logging
import sys
from pathlib import Path

from .config import ConfigError, PedMetaSettings, load_settings
from .describer import PedDescriber
from .entities import StaticEntity, StaticEntityAccessor
from .errors import SourceNotFoundError
from .models import ALL_CATEGORIES, CategoryMask, ComponentVariant, parse_category_mask
from .store import RuleStore

logger = logging.getLogger("pedmeta")


def parse_variant(text: str) -> tuple[int, ComponentVariant]:
    """Parse ``SLOT=DRAWABLE:TEXTURE`` (texture defaults to 0)."""
    try:
        slot, _, variant = text.partition("=")
        drawable, _, texture = variant.partition(":")
        return int(slot), ComponentVariant(int(drawable), int(texture or 0))
    except ValueError as e:
        raise argparse.ArgumentTypeError(
            f"invalid variant {text!r}, expected SLOT=DRAWABLE:TEXTURE"
        ) from e


def parse_categories(text: str) -> CategoryMask:
    try:
        return parse_category_mask(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pedmeta",
        description="Describe ped models from their component variants",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # List every model with metadata
  pedmeta list

  # Describe a model wearing drawable 12, texture 0 on component 4
  pedmeta describe A_M_Y_STLAT_02 --variant 4=12:0

  # Only race/sex and clothing, as scanner audio
  pedmeta describe A_M_Y_STLAT_02 --variant 4=12:0 --categories "RaceSex|Clothing" --audio
        """,
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="YAML configuration file"
    )
    parser.add_argument(
        "--metadata-dir",
        action="append",
        type=Path,
        dest="metadata_dirs",
        help="Metadata directory (repeatable, overrides the configured ones)"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", help="List known model identifiers")

    describe = subparsers.add_parser("describe", help="Describe one model")
    describe.add_argument("model", help="Model identifier")
    describe.add_argument(
        "--variant",
        action="append",
        type=parse_variant,
        default=[],
        help="Component variant as SLOT=DRAWABLE:TEXTURE (repeatable)"
    )
    describe.add_argument(
        "--categories",
        type=parse_categories,
        default=ALL_CATEGORIES,
        help="Categories to describe, e.g. 'RaceSex|Clothing' (default: all)"
    )
    describe.add_argument(
        "--audio",
        action="store_true",
        help="Print audio tokens instead of text"
    )

    subparsers.add_parser("demo", help="Describe every known model in its default variant")

    return parser


def _describe(describer: PedDescriber, args: argparse.Namespace) -> int:
    entity = StaticEntity(args.model, dict(args.variant))
    description = describer.describe(entity, args.categories)
    if description.text is None:
        print(f"Cannot describe {args.model}: {description.status.value}", file=sys.stderr)
        return 1
    print(description.audio if args.audio else description.text)
    return 0


def _demo(store: RuleStore, describer: PedDescriber) -> int:
    for meta in store.models():
        text = describer.text_description(StaticEntity(meta.model))
        print(f"{meta.key}: {text}")
    return 0


def run(args: argparse.Namespace, settings: PedMetaSettings) -> int:
    store = RuleStore(settings.metadata_dirs)
    describer = PedDescriber(store, StaticEntityAccessor(), settings.max_component_index)

    try:
        store.build()
    except SourceNotFoundError as e:
        logger.error(str(e))
        return 1

    if args.command == "list":
        for name in store.model_names():
            print(name)
        return 0
    if args.command == "describe":
        return _describe(describer, args)
    return _demo(store, describer)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the pedmeta command."""
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(args.config)
    except ConfigError as e:
        print(f"pedmeta: {e}", file=sys.stderr)
        return 1
    if args.metadata_dirs:
        settings.metadata_dirs = args.metadata_dirs

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )
    logger.debug(f"Metadata directories: {[str(d) for d in settings.metadata_dirs]}")

    return run(args, settings)


if __name__ == "__main__":
    sys.exit(main())
