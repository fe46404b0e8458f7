"""Command line entry point.

Examples::

    spritekeys discover sprites/*.png --max 6 --output sprites.setup
    spritekeys match screenshot.png --setup-file sprites.setup --offset-x 40 --offset-y 12
    spritekeys describe --setup-file sprites.setup
"""
import argparse
import logging
import sys
from typing import List, Optional

from .config.settings import Config, load_config
from .core.exceptions import ApplicationError
from .core.logging_config import configure_logging, logging_manager
from .services.discovery import DiscoveryDriver
from .services.matcher import SpriteKeyPixelMatcher
from .services.setup_codec import load_setup, parse_setup, save_setup
from .utils.image_utils import SUPPORTED_BACKENDS, load_raster, load_sprites

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_INPUT_ERROR = 2


def _add_setup_source(parser: argparse.ArgumentParser) -> None:
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--setup", help="setup string of a previously discovered matcher")
    source.add_argument("--setup-file", help="file holding a setup string")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="spritekeys",
        description="Identify sprites by a minimal set of key pixels.")
    parser.add_argument("--config", default="spritekeys.json",
                        help="JSON configuration file (default: %(default)s)")
    parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                        help="override the configured log level")
    parser.add_argument("--backend", choices=SUPPORTED_BACKENDS,
                        help="image loading library (default from config)")

    subparsers = parser.add_subparsers(dest="command", required=True)

    discover = subparsers.add_parser("discover", help="find key pixels for a sprite collection")
    discover.add_argument("sprites", nargs="+", help="sprite image files; their order sets the indices")
    discover.add_argument("--min", type=int, dest="minimum", help="smallest key pixel amount to try")
    discover.add_argument("--max", type=int, dest="maximum", help="largest key pixel amount to try")
    discover.add_argument("--workers", type=int, help="worker threads (0 runs trials inline)")
    discover.add_argument("--output", help="also write the setup string to this file")

    match = subparsers.add_parser("match", help="match an image against a setup")
    match.add_argument("image", help="image file to identify")
    _add_setup_source(match)
    match.add_argument("--offset-x", type=int, default=0, help="sprite position in the image, in x")
    match.add_argument("--offset-y", type=int, default=0, help="sprite position in the image, in y")

    describe = subparsers.add_parser("describe", help="summarize a setup")
    _add_setup_source(describe)

    return parser


def _load_matcher(args: argparse.Namespace) -> SpriteKeyPixelMatcher:
    if args.setup_file:
        return SpriteKeyPixelMatcher(load_setup(args.setup_file))
    return SpriteKeyPixelMatcher(parse_setup(args.setup))


def _discover(args: argparse.Namespace, cfg: Config, backend: str) -> int:
    sprites = load_sprites(args.sprites, backend=backend)
    minimum = cfg.min_key_pixels if args.minimum is None else args.minimum
    maximum = cfg.max_key_pixels if args.maximum is None else args.maximum
    workers = cfg.max_workers if args.workers is None else args.workers

    driver = DiscoveryDriver(sprites, minimum, maximum,
                             max_workers=workers, batch_size=cfg.batch_size)
    matcher = driver.run()
    if matcher is None:
        print(f"No key pixel set of {minimum} to {maximum} pixels tells the sprites apart.",
              file=sys.stderr)
        return EXIT_NOT_FOUND

    if args.output:
        save_setup(matcher, args.output)
    print(matcher.get_setup())
    return EXIT_OK


def _match(args: argparse.Namespace, backend: str) -> int:
    matcher = _load_matcher(args)
    image = load_raster(args.image, backend=backend)
    print(matcher.match(image, args.offset_x, args.offset_y))
    return EXIT_OK


def _describe(args: argparse.Namespace) -> int:
    print(_load_matcher(args))
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """Run the command line interface and return the exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        cfg = load_config(args.config)
    except ApplicationError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    if not logging_manager.configured:
        configure_logging(
            log_level=args.log_level or cfg.log_level,
            log_dir=cfg.log_dir,
            enable_file_logging=cfg.enable_file_logging,
            structured_logging=cfg.structured_logging,
        )
    backend = args.backend or cfg.image_backend

    try:
        if args.command == "discover":
            return _discover(args, cfg, backend)
        if args.command == "match":
            return _match(args, backend)
        return _describe(args)
    except (ApplicationError, OSError) as e:
        logger.debug("Command failed", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR


if __name__ == "__main__":
    sys.exit(main())
