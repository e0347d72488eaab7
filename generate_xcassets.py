"""Build an Xcode asset catalog from a folder of exported logo PNGs.

Example:
    python generate_xcassets.py --source out/logos/generated --output out/logos
"""
from __future__ import annotations

import argparse
import configparser
import logging
import os
import sys
from pathlib import Path
from typing import Optional, Sequence

from imagesets import CatalogConfig, build_catalog

CONFIG_FILE = 'config.ini'
CONFIG_SECTION = 'catalog'
LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'

DEFAULT_CONFIG = {
    'source_dir': os.path.join('..', '..', 'out', 'logos', 'generated'),
    'output_root': os.path.join('..', '..', 'out', 'logos'),
    'catalog_name': 'Logos',
    'image_extension': '.png',
}


def load_config(path: str = CONFIG_FILE) -> dict:
    """Read the ``[catalog]`` section of ``path`` over the defaults."""
    parser = configparser.ConfigParser(interpolation=None)
    try:
        if parser.read(path, encoding='utf-8') and parser.has_section(CONFIG_SECTION):
            data = {
                key: value
                for key, value in parser.items(CONFIG_SECTION)
                if key in DEFAULT_CONFIG
            }
            return {**DEFAULT_CONFIG, **data}
    except (configparser.Error, UnicodeDecodeError) as e:
        logging.error('Failed to parse config %s: %s', path, e)
    return DEFAULT_CONFIG.copy()


def save_config(cfg: dict, path: str = CONFIG_FILE) -> None:
    parser = configparser.ConfigParser(interpolation=None)
    parser[CONFIG_SECTION] = {key: cfg.get(key, value) for key, value in DEFAULT_CONFIG.items()}
    with open(path, 'w', encoding='utf-8') as f:
        parser.write(f)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description='Group NAME-SIZE[@Nx].png files into an Xcode .xcassets catalog.'
    )
    parser.add_argument('--config', default=CONFIG_FILE, help='INI file with a [catalog] section')
    parser.add_argument('--source', help='directory with the exported images')
    parser.add_argument('--output', help='directory the catalog is created in')
    parser.add_argument('--name', help='catalog name without the .xcassets suffix')
    parser.add_argument('--extension', help='image file extension, e.g. .png')
    parser.add_argument('--log-file', help='write the log here instead of stderr')
    parser.add_argument('-v', '--verbose', action='store_true', help='debug logging')
    return parser.parse_args(argv)


def make_config(args: argparse.Namespace) -> CatalogConfig:
    """Merge defaults, the INI file and command-line flags."""
    cfg = load_config(args.config)
    overrides = {
        'source_dir': args.source,
        'output_root': args.output,
        'catalog_name': args.name,
        'image_extension': args.extension,
    }
    cfg.update({key: value for key, value in overrides.items() if value})

    extension = cfg['image_extension']
    if not extension.startswith('.'):
        extension = '.' + extension
    return CatalogConfig(
        source_dir=Path(cfg['source_dir']),
        output_root=Path(cfg['output_root']),
        catalog_name=cfg['catalog_name'],
        image_extension=extension,
    )


def setup_logging(log_file: Optional[str] = None, verbose: bool = False) -> None:
    logging.basicConfig(
        filename=log_file,
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        force=True,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the generator, returning the process exit code."""
    args = parse_args(argv)
    setup_logging(args.log_file, args.verbose)
    config = make_config(args)
    logging.debug('Using %s', config)

    try:
        written = build_catalog(config)
    except OSError as e:
        logging.error('Catalog generation aborted: %s', e)
        # The log already goes to stderr unless redirected to a file.
        if args.log_file:
            print(f'Error: {e}', file=sys.stderr)
        return 1

    print(f'Wrote {len(written)} imageset(s) to {config.catalog_dir}')
    return 0


if __name__ == '__main__':
    sys.exit(main())
