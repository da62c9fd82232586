# epub_ingest/src/epub_ingest/core/epub/reader.py
"""
Module de lecture EPUB.

Responsabilité unique: Orchestrer l'analyse complète d'une archive EPUB
et publier le modèle Book.
"""

import asyncio
import logging
from typing import Optional

from ..errors import EpubError
from ..models import Book
from .archive import ArchiveReader
from .chapters import extract_chapters
from .container import resolve_package_path
from .cover_finder import find_cover_image
from .package import load_package_document
from .resources import materialize_resources

logger = logging.getLogger(__name__)


async def parse_epub(data: bytes) -> Book:
    """
    Analyse une archive EPUB chargée en mémoire.

    Args:
        data: Contenu binaire de l'archive

    Returns:
        Book avec métadonnées, chapitres, ressources et couverture

    Raises:
        ArchiveError: si les données ne sont pas une archive ZIP
        ContainerError: si le pointeur de conteneur est inutilisable
        PackageError: si le document de package est absent ou mal formé
    """
    return await parse_archive(ArchiveReader(data))


async def parse_archive(archive: ArchiveReader) -> Book:
    """
    Analyse une archive déjà ouverte, puis la ferme.

    Le Book n'est construit qu'à la fin: une annulation en cours de route
    ne laisse aucun résultat partiel.
    """
    with archive:
        opf_path, opf_dir = await resolve_package_path(archive)
        package = await load_package_document(archive, opf_path, opf_dir)

        chapters, skipped = await extract_chapters(archive, package)
        resources, skipped_resources = await materialize_resources(archive, package.manifest)
        cover_image, skipped_cover = await find_cover_image(archive, package.manifest)

    skipped.extend(skipped_resources)
    if skipped_cover is not None:
        skipped.append(skipped_cover)

    book = Book(
        metadata=package.metadata,
        chapters=chapters,
        resources=resources,
        cover_image=cover_image,
        skipped=skipped,
    )
    logger.info(
        "Parsed '%s': %d chapter(s), %d resource(s), %d skipped",
        book.metadata.title,
        book.chapter_count,
        len(book.resources),
        len(book.skipped),
    )
    return book


def read_epub_file(epub_path: str) -> Book:
    """
    Analyse un fichier EPUB depuis le disque (version synchrone).

    Raises:
        OSError: si le fichier est illisible
        EpubError: si l'archive est invalide
    """
    return asyncio.run(parse_archive(ArchiveReader.from_path(epub_path)))


def safe_read_epub(epub_path: str) -> Optional[Book]:
    """
    Lit un fichier EPUB de manière sécurisée.

    Args:
        epub_path: Chemin vers le fichier EPUB

    Returns:
        Book si succès, None sinon
    """
    try:
        return read_epub_file(epub_path)
    except (OSError, EpubError) as e:
        logger.exception("Failed to read %s: %s", epub_path, e)
        return None
