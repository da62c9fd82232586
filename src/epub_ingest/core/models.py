from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Optional, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Metadata:
    """Modèle de données pour les métadonnées d'un livre EPUB."""

    title: str
    author: str
    language: str
    identifier: str
    description: str | None = None
    publisher: str | None = None
    date: str | None = None


@dataclass(frozen=True)
class Chapter:
    """Un document de contenu du spine, prêt pour le rendu."""

    id: str
    title: str
    href: str
    content: str
    # Position dans le spine d'origine (peut contenir des trous)
    order: int


@dataclass(frozen=True)
class ManifestItem:
    """Entrée du manifest, utilisée uniquement pendant l'analyse."""

    id: str
    href: str
    media_type: str | None = None
    properties: str | None = None

    def property_tokens(self) -> List[str]:
        return (self.properties or "").split()


@dataclass
class PackageDocument:
    """Vue analysée du document de package (OPF)."""

    path: str
    directory: str
    metadata: Metadata
    manifest: Dict[str, ManifestItem] = field(default_factory=dict)
    spine: List[str] = field(default_factory=list)


# --- Résultats par élément ---


@dataclass(frozen=True)
class Loaded(Generic[T]):
    """Élément chargé avec succès."""

    value: T


@dataclass(frozen=True)
class Skipped:
    """Élément écarté pendant l'analyse, avec la raison."""

    kind: str  # "chapter", "resource" ou "cover"
    key: str
    reason: str


ItemResult = Union[Loaded[Any], Skipped]


@dataclass
class Book:
    """Résultat complet de l'analyse d'un EPUB."""

    metadata: Metadata
    chapters: List[Chapter] = field(default_factory=list)
    resources: Dict[str, str] = field(default_factory=dict)
    cover_image: str | None = None

    # Chapitres, ressources et couverture écartés
    skipped: List[Skipped] = field(default_factory=list)

    @property
    def chapter_count(self) -> int:
        return len(self.chapters)

    def get_chapter(self, chapter_id: str) -> Optional[Chapter]:
        for chapter in self.chapters:
            if chapter.id == chapter_id:
                return chapter
        return None
