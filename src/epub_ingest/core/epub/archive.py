# epub_ingest/src/epub_ingest/core/epub/archive.py
"""
Module d'accès à l'archive EPUB.

Responsabilité unique: Exposer les entrées du conteneur ZIP par chemin,
en octets, en texte ou en base64.
"""

import asyncio
import base64
import io
import logging
import zipfile
import zlib

from ..errors import ArchiveError, EntryNotFoundError, EntryReadError

logger = logging.getLogger(__name__)


class ArchiveReader:
    """
    Lecteur d'archive EPUB entièrement chargé en mémoire.

    Chaque lecture est un point de suspension: la coroutine rend la main à
    la boucle d'événements avant de lire l'entrée.
    """

    def __init__(self, data: bytes):
        try:
            self._zip = zipfile.ZipFile(io.BytesIO(data))
        except (zipfile.BadZipFile, ValueError) as e:
            raise ArchiveError(f"Invalid EPUB: not a zip archive ({e})") from e
        self._names = set(self._zip.namelist())
        logger.debug("Opened archive with %d entries", len(self._names))

    @classmethod
    def from_path(cls, epub_path: str) -> "ArchiveReader":
        with open(epub_path, "rb") as f:
            return cls(f.read())

    def __enter__(self) -> "ArchiveReader":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._zip.close()

    def has_entry(self, path: str) -> bool:
        return path in self._names

    async def read_bytes(self, path: str) -> bytes:
        """
        Lit une entrée de l'archive.

        Raises:
            EntryNotFoundError: si l'entrée n'existe pas
            EntryReadError: si l'entrée est corrompue, chiffrée ou compressée
                avec une méthode non supportée
        """
        await asyncio.sleep(0)
        if not self.has_entry(path):
            raise EntryNotFoundError(path)
        try:
            return self._zip.read(path)
        except (zipfile.BadZipFile, zlib.error, NotImplementedError, RuntimeError, EOFError) as e:
            raise EntryReadError(path, e) from e

    async def read_text(self, path: str) -> str:
        return decode_text(await self.read_bytes(path))

    async def read_base64(self, path: str) -> str:
        raw = await self.read_bytes(path)
        return base64.b64encode(raw).decode("ascii")


def decode_text(raw: bytes) -> str:
    """Décode une entrée texte (UTF-8 par défaut, UTF-16 si BOM)."""
    if raw.startswith((b"\xff\xfe", b"\xfe\xff")):
        return raw.decode("utf-16", errors="replace")
    return raw.decode("utf-8-sig", errors="replace")
