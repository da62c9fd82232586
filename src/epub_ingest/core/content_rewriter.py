# epub_ingest/src/epub_ingest/core/content_rewriter.py
"""
Réécriture du contenu des chapitres pour le rendu.

Remplace les références relatives aux ressources par leurs références de
données inline et normalise les lecteurs audio. Fonction pure: appliquée au
moment de l'affichage, jamais pendant l'analyse.
"""

import logging
import posixpath
from typing import Dict, Iterator, Mapping, Optional, Tuple
from urllib.parse import unquote, urlparse

from bs4 import BeautifulSoup, Tag

from ..config import AUDIO_PRELOAD, AUDIO_STYLE
from .models import Chapter

logger = logging.getLogger(__name__)

# (balise, attribut) réécrits en plus de tous les attributs src
_LINK_ATTRIBUTES = (("image", "href"), ("image", "xlink:href"))


def _normalize_path(path: str) -> str:
    """Retire fragment et query, décode les %xx et résout les '..'."""
    path = unquote(path.split("#", 1)[0].split("?", 1)[0])
    if not path:
        return ""
    return posixpath.normpath(path)


class ResourceIndex:
    """
    Index des ressources par chemin normalisé et par nom de fichier.

    Le chemin exact l'emporte; à défaut, le nom de fichier seul est accepté
    et la première ressource (ordre du mapping) gagne.
    """

    def __init__(self, resources: Mapping[str, str]):
        self._by_path: Dict[str, str] = {}
        self._by_basename: Dict[str, str] = {}
        for href, data_url in resources.items():
            path = _normalize_path(href)
            self._by_path.setdefault(path, data_url)
            self._by_basename.setdefault(posixpath.basename(path), data_url)

    def resolve(self, reference: str, base_href: Optional[str] = None) -> Optional[str]:
        """
        Trouve la référence inline d'une valeur d'attribut.

        Args:
            reference: Valeur brute de l'attribut (ex: '../images/a.png')
            base_href: Chemin du document qui contient la référence

        Returns:
            Data URL ou None si rien ne correspond
        """
        reference = reference.strip()
        # data:, http:, mailto:... ne sont jamais réécrits
        if not reference or urlparse(reference).scheme:
            return None
        path = _normalize_path(reference)
        if not path:
            return None

        candidates = [path]
        if base_href:
            candidates.insert(0, posixpath.normpath(posixpath.join(posixpath.dirname(base_href), path)))
        for candidate in candidates:
            if candidate in self._by_path:
                return self._by_path[candidate]
        return self._by_basename.get(posixpath.basename(path))


def _referencing_attributes(soup: BeautifulSoup) -> Iterator[Tuple[Tag, str]]:
    for tag in soup.find_all(src=True):
        yield tag, "src"
    for name, attribute in _LINK_ATTRIBUTES:
        for tag in soup.find_all(name, attrs={attribute: True}):
            yield tag, attribute


def _add_playback_controls(audio: Tag) -> None:
    if not audio.has_attr("controls"):
        audio["controls"] = ""
    audio.attrs.setdefault("preload", AUDIO_PRELOAD)
    audio.attrs.setdefault("style", AUDIO_STYLE)


def rewrite_content(
    content: str, resources: Mapping[str, str], base_href: Optional[str] = None
) -> str:
    """
    Réécrit le balisage d'un chapitre avec les ressources inline.

    Args:
        content: Balisage du chapitre (contenu du body)
        resources: Mapping href -> data URL produit par l'analyse
        base_href: Chemin du document de contenu, pour résoudre les
            références relatives exactement

    Returns:
        Nouveau balisage. Appliquer la fonction à son propre résultat ne
        change plus rien.
    """
    soup = BeautifulSoup(content, "html.parser")
    index = ResourceIndex(resources)
    replaced = 0

    for tag, attribute in list(_referencing_attributes(soup)):
        data_url = index.resolve(tag[attribute], base_href)
        if data_url is None:
            continue
        tag[attribute] = data_url
        replaced += 1
        if tag.name == "audio" and data_url.startswith("data:audio/"):
            _add_playback_controls(tag)

    for audio in soup.find_all("audio"):
        if not audio.has_attr("controls"):
            _add_playback_controls(audio)

    logger.debug("Rewrote %d resource reference(s)", replaced)
    return str(soup)


def render_chapter(chapter: Chapter, resources: Mapping[str, str]) -> str:
    """Balisage prêt à afficher pour un chapitre (le chapitre n'est pas modifié)."""
    return rewrite_content(chapter.content, resources, base_href=chapter.href)
