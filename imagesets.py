"""Group exported images into Xcode ``.imageset`` directories.

Input files follow the ``NAME-SIZE.png`` / ``NAME-SIZE@2x.png`` /
``NAME-SIZE@3x.png`` convention. Every ``(NAME, SIZE)`` pair becomes one
``NAME-SIZE.imageset`` directory holding the copied files and a
``Contents.json`` descriptor.
"""
from __future__ import annotations

import json
import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

CONTENTS_FILE = "Contents.json"
IMAGESET_SUFFIX = ".imageset"
CATALOG_SUFFIX = ".xcassets"
IDIOM = "universal"
SCALES = ("1x", "2x", "3x")

# Literal values expected by Xcode, never derived from input.
CATALOG_INFO = {"version": 1, "author": "xcode"}


@dataclass(frozen=True)
class CatalogConfig:
    """Paths and names for one catalog run.

    Fields:
        source_dir: Directory holding the exported images.
        output_root: Directory the ``.xcassets`` catalog is created in.
        catalog_name: Catalog name without the ``.xcassets`` suffix.
        image_extension: Extension of the files to pick up, e.g. ``.png``.
    """
    source_dir: Path
    output_root: Path
    catalog_name: str = "Logos"
    image_extension: str = ".png"

    @property
    def catalog_dir(self) -> Path:
        return self.output_root / f"{self.catalog_name}{CATALOG_SUFFIX}"


@dataclass(frozen=True)
class ImageRecord:
    filename: str
    base: str
    size: str
    scale: str

    @property
    def imageset_name(self) -> str:
        return f"{self.base}-{self.size}"


def scale_for(filename: str) -> str:
    """Return the display scale encoded in ``filename``."""
    if "@3x" in filename:
        return "3x"
    if "@2x" in filename:
        return "2x"
    return "1x"


def parse_filename(filename: str) -> Optional[ImageRecord]:
    """Split ``filename`` into base name, size token and scale.

    The base name is everything before the first ``-``. The size token runs
    from that ``-`` up to the first ``@`` when there is one, otherwise up to
    the first ``.``. Returns ``None`` for names without a ``-`` or with an
    empty base or size.
    """
    base, sep, rest = filename.partition("-")
    if not sep:
        return None
    if "@" in rest:
        size = rest.split("@", 1)[0]
    else:
        size = rest.split(".", 1)[0]
    if not base or not size:
        return None
    return ImageRecord(filename=filename, base=base, size=size, scale=scale_for(filename))


def discover_images(source_dir: Path, extension: str = ".png") -> list[str]:
    """Return names of files in ``source_dir`` with the given extension."""
    if not source_dir.is_dir():
        raise FileNotFoundError(f"Source directory not found: {source_dir}")

    extension = extension.lower()
    names = [
        entry.name
        for entry in source_dir.iterdir()
        if entry.is_file() and entry.suffix.lower() == extension
    ]
    return sorted(names)


def group_images(filenames: Iterable[str]) -> dict[str, dict[str, list[ImageRecord]]]:
    """Map base name -> size token -> records, in encounter order."""
    groups: dict[str, dict[str, list[ImageRecord]]] = {}
    for filename in filenames:
        record = parse_filename(filename)
        if record is None:
            logging.warning("Skipping malformed filename: %s", filename)
            continue
        records = groups.setdefault(record.base, {}).setdefault(record.size, [])
        duplicate = next((r for r in records if r.scale == record.scale), None)
        if duplicate is not None:
            logging.warning(
                "Skipping %s: %s already provides the %s image of %s",
                filename, duplicate.filename, record.scale, record.imageset_name,
            )
            continue
        records.append(record)
    return groups


def imageset_contents(records: Iterable[ImageRecord]) -> dict:
    """Build the ``Contents.json`` payload for one imageset."""
    return {
        "images": [
            {"idiom": IDIOM, "scale": record.scale, "filename": record.filename}
            for record in records
        ],
        "info": dict(CATALOG_INFO),
    }


def write_contents(directory: Path, contents: dict) -> Path:
    path = directory / CONTENTS_FILE
    with path.open("w", encoding="utf-8") as f:
        json.dump(contents, f, indent=2)
        f.write("\n")
    return path


def ensure_catalog(catalog_dir: Path) -> None:
    """Create the catalog directory and its top-level ``Contents.json``."""
    catalog_dir.mkdir(parents=True, exist_ok=True)
    if not (catalog_dir / CONTENTS_FILE).exists():
        write_contents(catalog_dir, {"info": dict(CATALOG_INFO)})


def write_imageset(
    records: list[ImageRecord], source_dir: Path, catalog_dir: Path
) -> Path:
    """Copy ``records`` into their imageset directory and write its descriptor.

    Existing files in the imageset directory are left in place.
    """
    name = records[0].imageset_name
    imageset_dir = catalog_dir / f"{name}{IMAGESET_SUFFIX}"
    try:
        imageset_dir.mkdir(exist_ok=True)
        for record in records:
            shutil.copy2(source_dir / record.filename, imageset_dir / record.filename)
        write_contents(imageset_dir, imageset_contents(records))
    except OSError as e:
        logging.error("Failed to write imageset %s: %s", name, e)
        raise

    found = {record.scale for record in records}
    missing = [scale for scale in SCALES if scale not in found]
    if missing:
        logging.warning("Imageset %s has no %s variant", name, ", ".join(missing))
    logging.info("Wrote %s (%d images)", imageset_dir.name, len(records))
    return imageset_dir


def build_catalog(config: CatalogConfig) -> list[Path]:
    """Run the whole pipeline and return the imageset directories written."""
    filenames = discover_images(config.source_dir, config.image_extension)
    logging.info("Found %d image(s) in %s", len(filenames), config.source_dir)
    groups = group_images(filenames)

    ensure_catalog(config.catalog_dir)
    written = []
    for sizes in groups.values():
        for records in sizes.values():
            written.append(write_imageset(records, config.source_dir, config.catalog_dir))
    return written
