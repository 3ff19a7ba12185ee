"""
Command line entry point.

Usage:
    photoblog [--config photoblog.yml] build

Reads the config (photoblog.yml, config.yml, ... in the current directory
when --config is not given) and writes the site to its output directory.
"""

import argparse
import logging
import sys

from photoblog import __version__
from photoblog.config import read_config
from photoblog.engine import generate
from photoblog.errors import PhotoblogError

log = logging.getLogger("photoblog")


def setup_logging(log_level: str = "INFO"):
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def build(args: argparse.Namespace) -> int:
    cfg, cfg_path = read_config(args.config)
    setup_logging(args.log_level or cfg.log_level)
    if cfg_path:
        log.info("using config path: %s", cfg_path)

    generate(cfg, log.getChild("build"))

    log.info("done! site written to %s/", cfg.output_or_default())
    return 0


def make_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="photoblog",
        description="Build a static photo blog from folders of images.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-c", "--config", help="path to the config file (yaml or json)")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="overrides log_level from the config",
    )
    commands = parser.add_subparsers(dest="command", required=True)
    build_cmd = commands.add_parser(
        "build",
        aliases=["b", "g", "generate"],
        help="build the photoblog",
    )
    build_cmd.set_defaults(func=build)
    return parser


def main(argv: list[str] | None = None):
    args = make_parser().parse_args(argv)
    try:
        status = args.func(args)
    except PhotoblogError as e:
        if not logging.getLogger().handlers:
            setup_logging()
        log.error("%s", e)
        status = 1
    sys.exit(status)


if __name__ == "__main__":
    main()
