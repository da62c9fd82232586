# epub_ingest/src/epub_ingest/core/epub/chapters.py
"""
Module d'extraction des chapitres.

Responsabilité unique: Parcourir le spine, charger chaque document de
contenu XHTML et en tirer un titre et le balisage du body.

Un chapitre qui échoue est écarté (Skipped) sans interrompre l'analyse.
"""

import logging
from typing import List, Optional, Tuple

from ...config import CHAPTER_TITLE_FALLBACK, CHAPTER_TITLE_TAGS, XHTML_MEDIA_TYPE
from ..errors import EntryError, MarkupError
from ..models import Chapter, ItemResult, Loaded, ManifestItem, PackageDocument, Skipped
from .archive import ArchiveReader, decode_text
from .markup import find_first, inner_markup, parse_markup, text_content

logger = logging.getLogger(__name__)


def derive_title(root, position: int) -> str:
    """
    Titre du chapitre: h1, puis h2, puis h3, puis <title>.

    Args:
        root: Racine du document de contenu
        position: Index dans le spine (0-based)
    """
    for tag in CHAPTER_TITLE_TAGS:
        title = text_content(find_first(root, tag))
        if title:
            return title
    return CHAPTER_TITLE_FALLBACK.format(number=position + 1)


async def load_chapter(
    archive: ArchiveReader, item_id: str, item: ManifestItem, position: int
) -> ItemResult:
    """Charge un document de contenu et renvoie Loaded(Chapter) ou Skipped."""
    try:
        raw = await archive.read_bytes(item.href)
        root = parse_markup(raw)
    except (EntryError, MarkupError) as e:
        logger.warning("Failed to load chapter %s: %s", item_id, e)
        return Skipped(kind="chapter", key=item_id, reason=str(e))

    body = find_first(root, "body")
    # Sans body, le document brut est repris tel quel (head compris)
    content = inner_markup(body) if body is not None else decode_text(raw)

    return Loaded(
        Chapter(
            id=item_id,
            title=derive_title(root, position),
            href=item.href,
            content=content,
            order=position,
        )
    )


def _content_item(package: PackageDocument, item_id: str) -> Optional[ManifestItem]:
    item = package.manifest.get(item_id)
    if item is None or item.media_type != XHTML_MEDIA_TYPE:
        return None
    return item


async def extract_chapters(
    archive: ArchiveReader, package: PackageDocument
) -> Tuple[List[Chapter], List[Skipped]]:
    """
    Extrait les chapitres dans l'ordre du spine.

    L'ordre de chaque chapitre est sa position dans le spine d'origine:
    les entrées écartées laissent des trous.

    Returns:
        Tuple (chapitres chargés, éléments écartés)
    """
    chapters: List[Chapter] = []
    skipped: List[Skipped] = []

    for position, item_id in enumerate(package.spine):
        if item_id not in package.manifest:
            logger.warning("Spine entry %s has no manifest item", item_id)
            skipped.append(Skipped(kind="chapter", key=item_id, reason="not in manifest"))
            continue

        item = _content_item(package, item_id)
        if item is None:
            logger.debug("Spine entry %s is not XHTML content, skipped", item_id)
            continue

        result = await load_chapter(archive, item_id, item, position)
        if isinstance(result, Loaded):
            chapters.append(result.value)
        else:
            skipped.append(result)

    logger.info("Extracted %d chapter(s) from %d spine entries", len(chapters), len(package.spine))
    return chapters, skipped
