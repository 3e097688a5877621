#!/usr/bin/env python3
"""
Command-line interface for pressmark.

Modes are plain words, matched exactly and in any order:

    pressmark              publish the site
    pressmark test         publish a pretty preview into test_dir
    pressmark debug        publish with verbose progress output
    pressmark init         write a default config.json, or create the input dirs
"""

import argparse
import asyncio
import sys
from typing import List, Optional

from . import __version__
from .core import Publisher, setup_logging
from .dirs import prepare_dirs
from .settings import SiteSettings, apply_modes


def init_site(settings_loader: SiteSettings, debug: bool) -> None:
    """Create the default config if missing, otherwise create the input directories."""
    logger = setup_logging(debug)
    if settings_loader.find_config_file() is None:
        config_path = settings_loader.create_default_config()
        print(f"Default config written to {config_path}. Please modify and then run init again.")
        return
    config = settings_loader.load_settings()
    logger.debug(config)
    in_dirs = asyncio.run(prepare_dirs(config.input_dir))
    for role, path in in_dirs.items():
        print(f"Input {role} directory: {path}")


def main(argv: Optional[List[str]] = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(description='pressmark - static web-log publisher')
    parser.add_argument('modes', nargs='*', metavar='mode',
                        help="any of 'init', 'debug' and 'test'")
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    args = parser.parse_args(argv)
    debug = 'debug' in args.modes
    test = 'test' in args.modes

    settings_loader = SiteSettings()
    try:
        if 'init' in args.modes:
            init_site(settings_loader, debug)
            return

        logger = setup_logging(debug)
        config = settings_loader.load_settings()
        if args.modes:
            logger.info('Config:')
            if debug:
                logger.info(' Debug-mode on.')
            if test:
                config = apply_modes(config, test=True)
                logger.debug(f"test output_dir={config.output_dir.dir}")
                logger.info(' Test mode activated.')
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    publisher = Publisher(config, debug=debug, test=test)
    try:
        asyncio.run(publisher.publish())
    except Exception:
        # Already logged with its traceback by the publisher.
        sys.exit(1)


if __name__ == '__main__':
    main()
