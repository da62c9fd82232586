# epub_ingest/src/epub_ingest/core/errors.py
"""
Exceptions levées par le pipeline d'ingestion EPUB.

Seules ArchiveError, ContainerError et PackageError sortent de parse_epub;
les autres sont absorbées chapitre par chapitre ou ressource par ressource.
"""


class EpubError(Exception):
    """Classe de base de toutes les erreurs EPUB."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ArchiveError(EpubError):
    """Le contenu fourni n'est pas une archive ZIP lisible."""


class ContainerError(EpubError):
    """META-INF/container.xml absent, illisible ou sans attribut full-path."""


class PackageError(EpubError):
    """Document de package (OPF) absent, illisible ou mal formé."""


class MarkupError(EpubError):
    """Balisage XML/XHTML mal formé."""


class EntryError(EpubError):
    """Entrée de l'archive absente ou illisible."""


class EntryReadError(EntryError):
    """Entrée présente mais illisible (CRC, compression, chiffrement)."""

    def __init__(self, path: str, cause: Exception) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Could not read {path}: {cause}")


class EntryNotFoundError(EntryError, KeyError):
    """Entrée absente de l'archive."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"File not found: {path}")

    def __str__(self) -> str:
        # KeyError.__str__ entoure le message de guillemets
        return f"File not found: {self.path}"
