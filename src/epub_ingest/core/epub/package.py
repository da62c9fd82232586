# epub_ingest/src/epub_ingest/core/epub/package.py
"""
Module d'interprétation du document de package (OPF).

Responsabilité unique: Produire les trois vues indépendantes du document
de package: métadonnées, manifest et spine.
"""

import logging
from typing import Dict, List

from lxml import etree

from ..errors import EntryError, EntryNotFoundError, MarkupError, PackageError
from ..models import ManifestItem, PackageDocument
from .archive import ArchiveReader
from .markup import parse_markup
from .metadata_extractors import extract_metadata

logger = logging.getLogger(__name__)


def extract_manifest(root: etree._Element, opf_dir: str) -> Dict[str, ManifestItem]:
    """
    Extrait le manifest, dans l'ordre du document.

    Les href sont préfixés par le dossier du document de package, par
    simple concaténation: les segments '..' ne sont pas normalisés.
    Les items sans id ou sans href sont ignorés.
    """
    manifest: Dict[str, ManifestItem] = {}
    for section in root.iter("{*}manifest"):
        for item in section.iter("{*}item"):
            item_id = item.get("id")
            href = item.get("href")
            if not item_id or not href:
                logger.debug("Skipping manifest item without id or href")
                continue
            manifest[item_id] = ManifestItem(
                id=item_id,
                href=opf_dir + href,
                media_type=item.get("media-type"),
                properties=item.get("properties"),
            )
    return manifest


def extract_spine(root: etree._Element) -> List[str]:
    """Extrait les idref du spine dans l'ordre, sans vérifier le manifest."""
    spine: List[str] = []
    for section in root.iter("{*}spine"):
        for itemref in section.iter("{*}itemref"):
            idref = itemref.get("idref")
            if idref:
                spine.append(idref)
    return spine


def interpret_package(root: etree._Element, opf_path: str, opf_dir: str) -> PackageDocument:
    """Construit le PackageDocument depuis un arbre OPF déjà analysé."""
    return PackageDocument(
        path=opf_path,
        directory=opf_dir,
        metadata=extract_metadata(root),
        manifest=extract_manifest(root, opf_dir),
        spine=extract_spine(root),
    )


async def load_package_document(
    archive: ArchiveReader, opf_path: str, opf_dir: str
) -> PackageDocument:
    """
    Lit et interprète le document de package.

    Raises:
        PackageError: si le document est absent ou mal formé
    """
    try:
        root = parse_markup(await archive.read_bytes(opf_path))
    except EntryNotFoundError as e:
        raise PackageError(f"Invalid EPUB: package document not found: {opf_path}") from e
    except EntryError as e:
        raise PackageError(f"Invalid EPUB: unreadable package document {opf_path}: {e}") from e
    except MarkupError as e:
        raise PackageError(f"Invalid EPUB: malformed package document {opf_path}: {e}") from e

    package = interpret_package(root, opf_path, opf_dir)
    logger.info(
        "Package %s: %d manifest item(s), %d spine entries",
        opf_path,
        len(package.manifest),
        len(package.spine),
    )
    return package
