# epub_ingest/src/epub_ingest/core/epub/container.py
"""
Module de résolution du conteneur EPUB.

Responsabilité unique: Trouver le document de package (OPF) à partir de
META-INF/container.xml. Aucune recherche de repli: sans ce fichier,
l'archive est rejetée.
"""

import logging
from typing import Tuple

from ...config import CONTAINER_ERROR_MESSAGE, CONTAINER_PATH
from ..errors import ContainerError, EntryError, MarkupError
from .archive import ArchiveReader
from .markup import parse_markup

logger = logging.getLogger(__name__)


def package_directory(opf_path: str) -> str:
    """Dossier du document de package, avec le '/' final ('' à la racine)."""
    return opf_path[: opf_path.rfind("/") + 1]


async def resolve_package_path(archive: ArchiveReader) -> Tuple[str, str]:
    """
    Lit le pointeur de conteneur et renvoie le chemin du document de package.

    Args:
        archive: Archive EPUB ouverte

    Returns:
        Tuple (chemin OPF, dossier OPF)

    Raises:
        ContainerError: si container.xml est absent, illisible ou si
            l'élément rootfile n'a pas d'attribut full-path
    """
    try:
        root = parse_markup(await archive.read_bytes(CONTAINER_PATH))
    except (EntryError, MarkupError) as e:
        logger.warning("Could not read %s: %s", CONTAINER_PATH, e)
        raise ContainerError(CONTAINER_ERROR_MESSAGE) from e

    rootfile = next(root.iter("{*}rootfile"), None)
    opf_path = rootfile.get("full-path") if rootfile is not None else None
    if not opf_path:
        logger.warning("No rootfile full-path in %s", CONTAINER_PATH)
        raise ContainerError(CONTAINER_ERROR_MESSAGE)

    logger.debug("Package document located at %s", opf_path)
    return opf_path, package_directory(opf_path)
