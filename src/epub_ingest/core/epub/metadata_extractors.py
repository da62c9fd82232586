# epub_ingest/src/epub_ingest/core/epub/metadata_extractors.py
"""
Module d'extracteurs de métadonnées.

Responsabilité unique: Lire les champs Dublin Core du document de package
malgré la diversité des déclarations de namespace rencontrées.

Pattern: Strategy Pattern. Chaque stratégie tente d'extraire un champ et
renvoie None si elle échoue; la première réponse non vide l'emporte.
"""

import logging
from typing import Callable, Optional, Tuple

from lxml import etree

from ...config import DEFAULT_AUTHOR, DEFAULT_IDENTIFIER, DEFAULT_LANGUAGE, DEFAULT_TITLE
from ..models import Metadata
from .markup import find_first, local_name, text_content

logger = logging.getLogger(__name__)

MetadataStrategy = Callable[[etree._Element, str], Optional[str]]


def _non_empty(element: Optional[etree._Element]) -> Optional[str]:
    text = text_content(element)
    return text or None


def _first_with_attribute(metadata: etree._Element, attribute: str, value: str):
    for element in metadata.iter(etree.Element):
        if element is not metadata and element.get(attribute) == value:
            return element
    return None


def by_name_attribute(metadata: etree._Element, field: str) -> Optional[str]:
    """Stratégie 1: élément portant name="<champ>"."""
    return _non_empty(_first_with_attribute(metadata, "name", field))


def by_property_attribute(metadata: etree._Element, field: str) -> Optional[str]:
    """Stratégie 2: élément portant property="<champ>"."""
    return _non_empty(_first_with_attribute(metadata, "property", field))


def by_local_name_scan(metadata: etree._Element, field: str) -> Optional[str]:
    """
    Stratégie 3: parcours de tous les descendants (champs préfixés seulement).

    Accepte le nom local ('title' pour 'dc:title') ou la balise préfixée
    littérale, pour les documents qui n'ont pas déclaré le namespace.
    """
    if ":" not in field:
        return None
    local = field.split(":", 1)[1]
    for element in metadata.iter(etree.Element):
        if element is metadata:
            continue
        if local_name(element) in (local, field):
            return _non_empty(element)
    return None


def by_plain_tag(metadata: etree._Element, field: str) -> Optional[str]:
    """Stratégie 4: balise simple sans préfixe, namespace ignoré."""
    local = field.split(":", 1)[1] if ":" in field else field
    return _non_empty(find_first(metadata, local))


# L'ordre fait partie du contrat
METADATA_STRATEGIES: Tuple[MetadataStrategy, ...] = (
    by_name_attribute,
    by_property_attribute,
    by_local_name_scan,
    by_plain_tag,
)


def get_metadata_field(root: etree._Element, name: str) -> Optional[str]:
    """
    Extrait un champ de métadonnées (ex: 'title', 'creator').

    Tente 'dc:<name>' puis '<name>', chacun à travers toutes les stratégies.

    Args:
        root: Racine du document de package
        name: Nom du champ sans préfixe

    Returns:
        Texte du champ ou None si aucune stratégie n'aboutit
    """
    metadata = find_first(root, "metadata")
    if metadata is None:
        return None

    for field in (f"dc:{name}", name):
        for strategy in METADATA_STRATEGIES:
            value = strategy(metadata, field)
            if value:
                logger.debug("Metadata %s found via %s", field, strategy.__name__)
                return value
    return None


def extract_metadata(root: etree._Element) -> Metadata:
    """Construit le modèle Metadata, avec les valeurs par défaut si besoin."""
    return Metadata(
        title=get_metadata_field(root, "title") or DEFAULT_TITLE,
        author=get_metadata_field(root, "creator") or DEFAULT_AUTHOR,
        language=get_metadata_field(root, "language") or DEFAULT_LANGUAGE,
        identifier=get_metadata_field(root, "identifier") or DEFAULT_IDENTIFIER,
        description=get_metadata_field(root, "description"),
        publisher=get_metadata_field(root, "publisher"),
        date=get_metadata_field(root, "date"),
    )
