# epub_ingest/src/epub_ingest/core/epub/resources.py
"""
Module de matérialisation des ressources.

Responsabilité unique: Charger les images, feuilles de style et fichiers
audio du manifest et les encoder en références de données inline.
"""

import logging
from typing import Dict, List, Optional, Tuple

from ...config import RESOURCE_MEDIA_PREFIXES, RESOURCE_MEDIA_TYPES
from ..errors import EntryError
from ..models import ItemResult, Loaded, ManifestItem, Skipped
from .archive import ArchiveReader

logger = logging.getLogger(__name__)


def to_data_url(media_type: Optional[str], payload: str) -> str:
    """Construit une référence 'data:<type>;base64,<payload>'."""
    return f"data:{media_type};base64,{payload}"


def is_resource(media_type: Optional[str]) -> bool:
    """Vrai pour image/*, audio/* et text/css."""
    if not media_type:
        return False
    return media_type.startswith(RESOURCE_MEDIA_PREFIXES) or media_type in RESOURCE_MEDIA_TYPES


async def load_inline(archive: ArchiveReader, item: ManifestItem, kind: str) -> ItemResult:
    """Charge une entrée du manifest en base64: Loaded(data URL) ou Skipped."""
    try:
        payload = await archive.read_base64(item.href)
    except EntryError as e:
        logger.warning("Failed to load %s %s: %s", kind, item.href, e)
        return Skipped(kind=kind, key=item.href, reason=str(e))
    return Loaded(to_data_url(item.media_type, payload))


async def materialize_resources(
    archive: ArchiveReader, manifest: Dict[str, ManifestItem]
) -> Tuple[Dict[str, str], List[Skipped]]:
    """
    Encode toutes les ressources du manifest (et non du spine).

    Les clés sont les href du manifest; un même href n'est chargé qu'une
    fois. Un échec n'écarte que la ressource concernée.

    Returns:
        Tuple (href -> data URL, ressources écartées)
    """
    resources: Dict[str, str] = {}
    skipped: List[Skipped] = []

    for item in manifest.values():
        if not is_resource(item.media_type) or item.href in resources:
            continue
        result = await load_inline(archive, item, "resource")
        if isinstance(result, Loaded):
            resources[item.href] = result.value
        else:
            skipped.append(result)

    logger.info("Materialized %d resource(s), %d skipped", len(resources), len(skipped))
    return resources, skipped
