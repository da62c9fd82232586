# epub_ingest/src/epub_ingest/core/epub/cover_finder.py
"""
Module de recherche de couverture EPUB.

Responsabilité unique: Trouver l'image de couverture déclarée dans le
manifest et la renvoyer en référence de données inline.

Seul le premier item qui correspond (dans l'ordre du manifest) est retenu:
si son chargement échoue, il n'y a pas de couverture.
"""

import logging
from typing import Dict, Optional, Tuple

from ...config import COVER_IDS, COVER_PROPERTY
from ..models import Loaded, ManifestItem, Skipped
from .archive import ArchiveReader
from .resources import load_inline

logger = logging.getLogger(__name__)


def is_cover_candidate(item: ManifestItem) -> bool:
    """Propriété 'cover-image' ou id conventionnel ('cover', 'cover-image')."""
    return COVER_PROPERTY in item.property_tokens() or item.id in COVER_IDS


def find_cover_item(manifest: Dict[str, ManifestItem]) -> Optional[ManifestItem]:
    """Premier candidat dans l'ordre du manifest, ou None."""
    for item in manifest.values():
        if is_cover_candidate(item):
            return item
    return None


async def find_cover_image(
    archive: ArchiveReader, manifest: Dict[str, ManifestItem]
) -> Tuple[Optional[str], Optional[Skipped]]:
    """
    Charge la couverture.

    Returns:
        Tuple (data URL ou None, Skipped si le chargement a échoué)
    """
    item = find_cover_item(manifest)
    if item is None:
        logger.info("No cover declared in manifest")
        return None, None

    result = await load_inline(archive, item, "cover")
    if isinstance(result, Loaded):
        logger.info("Cover found via manifest item %s", item.id)
        return result.value, None
    return None, result
