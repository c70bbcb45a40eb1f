"""
Command-line interface for locale-sync.

Usage Examples:
    Extract translatable strings into the keys file:
        locale-sync extract

    Add newly extracted keys to every locale file:
        locale-sync merge

    Translate pending keys and update the i18n module:
        locale-sync translate

    Run every stage for French and German only:
        locale-sync sync --language fr --language de
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import NamedTuple

from .config.manager import ConfigManager
from .config.schema import SyncConfig
from .core.exceptions import ConfigurationError, LocaleSyncError
from .core.orchestrator import SyncOrchestrator, SyncSummary
from .extraction.keys import load_extracted_keys, run_extraction
from .providers.http_provider import HttpTranslationProvider

logger = logging.getLogger(__name__)

COMMANDS = ("extract", "merge", "translate", "sync")
DEFAULT_CONFIG_FILE = Path("locale-sync.yml")


class SyncArgs(NamedTuple):
    """Type-safe container for command-line arguments."""

    command: str
    config: Path
    languages: list[str]
    no_patch: bool
    verbose: bool


def setup_logging(verbose: bool = False) -> None:
    """
    Set up logging configuration.

    Args:
        verbose: Enable verbose logging
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def parse_arguments(argv: list[str] | None = None) -> SyncArgs:
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments in a type-safe container
    """
    parser = argparse.ArgumentParser(
        prog="locale-sync",
        description="Keep locale files and the generated i18n module in sync",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Stages:
  extract     Scan sources and write the extracted keys file
  merge       Add new keys (blank) to every locale file
  translate   Fill blank values with the translation provider and patch the module
  sync        extract + merge + translate
        """,
    )

    _ = parser.add_argument("command", choices=COMMANDS, help="Stage to run")

    _ = parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG_FILE,
        help=f"Configuration file (default: {DEFAULT_CONFIG_FILE})",
    )

    _ = parser.add_argument(
        "--language",
        action="append",
        default=[],
        dest="languages",
        help="Only process this language (can be used multiple times)",
    )

    _ = parser.add_argument(
        "--no-patch",
        action="store_true",
        help="Do not update the resource module",
    )

    _ = parser.add_argument(
        "--verbose", action="store_true", help="Enable verbose logging"
    )

    args = parser.parse_args(argv)

    # Convert to type-safe container - argparse returns Any types
    return SyncArgs(
        command=args.command,  # pyright: ignore[reportAny]
        config=args.config,  # pyright: ignore[reportAny]
        languages=args.languages or [],  # pyright: ignore[reportAny]
        no_patch=args.no_patch,  # pyright: ignore[reportAny]
        verbose=args.verbose,  # pyright: ignore[reportAny]
    )


def report_summary(summary: SyncSummary) -> None:
    """Log the per-language outcome of a run."""
    logger.info("=" * 60)
    for report in summary.languages:
        if report.failed:
            logger.error(f"❌ {report}")
        else:
            logger.info(f"✅ {report}")
        for key in report.pending:
            logger.info(f"   • still pending: {key!r}")
        for warning in report.warnings:
            logger.warning(f"   ⚠️  {warning}")
        for key in report.conflicts:
            logger.warning(f"   ⚠️  artifact value kept for {key!r}")

    for language, path, error in summary.patch_failures:
        logger.error(f"❌ Failed to patch {path} for {language}: {error}")

    logger.info(str(summary))


def check_provider(config: SyncConfig) -> None:
    """
    Ensure the provider settings are usable before any stage runs.

    Raises:
        ConfigurationError: If the endpoint or its region is missing
    """
    if not config.provider.endpoint:
        raise ConfigurationError(
            "No translation endpoint configured (provider.endpoint or TRANSLATE_ENDPOINT)"
        )
    if "{region}" in config.provider.endpoint and not config.provider.region:
        raise ConfigurationError(
            "Endpoint requires a region (provider.region, TRANSLATE_REGION or AWS_REGION)"
        )


async def run_sync(config: SyncConfig, command: str, patch: bool) -> SyncSummary:
    """
    Run the merge and/or translate stages.

    Raises:
        ConfigurationError: If the configuration cannot support the stage
    """
    translate = command in ("translate", "sync")
    keys = (
        load_extracted_keys(config.extraction.keys_path)
        if command in ("merge", "sync")
        else None
    )
    patch = patch and translate

    if not translate:
        orchestrator = SyncOrchestrator(config)
        return await orchestrator.run(keys, translate=False, patch=False)

    check_provider(config)

    async with HttpTranslationProvider.from_config(config.provider) as provider:
        orchestrator = SyncOrchestrator(config, provider)
        return await orchestrator.run(keys, translate=True, patch=patch)


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for the locale-sync command.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    args = parse_arguments(argv)
    setup_logging(args.verbose)

    try:
        _ = ConfigManager.load_environment()
        config = ConfigManager.load_config(args.config)
        if args.languages:
            config = ConfigManager.with_languages(config, args.languages)
        if args.command in ("translate", "sync"):
            check_provider(config)

        if args.command in ("extract", "sync"):
            result = run_extraction(config.extraction)
            logger.info(f"✂️  {result}")
            if args.command == "extract":
                return 0

        summary = asyncio.run(run_sync(config, args.command, not args.no_patch))
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return 1
    except LocaleSyncError as e:
        logger.error(f"Fatal error: {e}")
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 1

    report_summary(summary)
    return 0 if summary.success else 1


if __name__ == "__main__":
    sys.exit(main())
