# epub_ingest/src/epub_ingest/core/epub/markup.py
"""
Module de lecture du balisage structuré (XML / XHTML).

Responsabilité unique: Transformer du texte XML en arbre navigable et
signaler le balisage mal formé.
"""

import copy
import re
from html import escape
from typing import Optional, Union

from lxml import etree

from ..errors import MarkupError

_XML_DECLARATION_RE = re.compile(r"^\s*<\?xml[^>]*\?>")


def _make_parser() -> etree.XMLParser:
    # Parser strict: pas de réseau, pas d'entités externes, pas de récupération
    return etree.XMLParser(resolve_entities=False, no_network=True, recover=False)


def parse_markup(content: Union[bytes, str]) -> etree._Element:
    """
    Analyse un document XML ou XHTML.

    Args:
        content: Document brut. Les octets sont préférés: l'encodage est
            alors lu dans la déclaration XML.

    Returns:
        Élément racine du document

    Raises:
        MarkupError: si le document est vide ou mal formé
    """
    if isinstance(content, str):
        # lxml refuse une chaîne Unicode accompagnée d'une déclaration d'encodage
        content = _XML_DECLARATION_RE.sub("", content.lstrip("\ufeff"), count=1)
        content = content.encode("utf-8")
    if not content.strip():
        raise MarkupError("Invalid XML content: empty document")
    try:
        root = etree.fromstring(content, _make_parser())
    except etree.XMLSyntaxError as e:
        raise MarkupError(f"Invalid XML content: {e}") from e
    if root is None:
        raise MarkupError("Invalid XML content: no root element")
    return root


def local_name(element: etree._Element) -> str:
    """Nom de balise sans espace de noms."""
    return etree.QName(element).localname


def text_content(element: Optional[etree._Element]) -> str:
    """Texte de l'élément et de ses descendants, sans espaces aux bords."""
    if element is None:
        return ""
    return "".join(element.itertext()).strip()


def find_first(root: etree._Element, tag: str) -> Optional[etree._Element]:
    """Premier descendant portant ce nom local, quel que soit son namespace."""
    return next(root.iter("{*}" + tag), None)


def strip_namespaces(root: etree._Element) -> etree._Element:
    """Retire les espaces de noms des balises (modifie l'arbre en place)."""
    for element in root.iter(etree.Element):
        element.tag = local_name(element)
    etree.cleanup_namespaces(root)
    return root


def inner_markup(element: etree._Element) -> str:
    """
    Sérialise le contenu d'un élément, sans la balise elle-même.

    Les espaces de noms sont retirés d'une copie de l'élément, sinon chaque
    enfant répète la déclaration xmlns.
    """
    element = strip_namespaces(copy.deepcopy(element))
    parts = [escape(element.text or "", quote=False)]
    for child in element:
        parts.append(etree.tostring(child, encoding="unicode", method="xml"))
    return "".join(parts)
