# epub_ingest/src/epub_ingest/cli.py
"""
Logique pour le mode ligne de commande.

Utilise le lecteur EPUB pour analyser un fichier et afficher le résultat.
"""

import logging

from .core.content_rewriter import render_chapter
from .core.epub import read_epub_file
from .core.models import Book

logger = logging.getLogger(__name__)


def cli_parse_file(epub_path: str) -> Book:
    """
    Analyse un fichier EPUB en mode CLI.

    Args:
        epub_path: Chemin vers le fichier EPUB

    Returns:
        Livre analysé

    Raises:
        EpubError: si l'archive ne peut pas être analysée
    """
    logger.info(f"CLI mode - parsing file: {epub_path}")
    book = read_epub_file(epub_path)
    logger.info(f"CLI mode - parsed {book.chapter_count} chapters")
    return book


def print_book_summary(book: Book):
    """Affiche un résumé du livre analysé."""
    meta = book.metadata
    print("\n=== Livre ===")
    print(f"Titre: {meta.title}")
    print(f"Auteur: {meta.author}")
    print(f"Langue: {meta.language}")
    if meta.identifier:
        print(f"Identifiant: {meta.identifier}")
    if meta.publisher:
        print(f"Éditeur: {meta.publisher}")
    if meta.date:
        print(f"Date: {meta.date}")

    print(f"\nChapitres: {book.chapter_count}")
    for chapter in book.chapters:
        print(f"  [{chapter.order}] {chapter.title} ({chapter.href})")

    print(f"\nRessources: {len(book.resources)}")
    print(f"Couverture: {'oui' if book.cover_image else 'non'}")

    if book.skipped:
        print("\n=== Éléments écartés ===")
        for item in book.skipped:
            print(f"  {item.kind} {item.key}: {item.reason}")


def print_rendered_chapter(book: Book, index: int) -> bool:
    """
    Affiche le balisage réécrit d'un chapitre.

    Returns:
        False si l'index est hors limites
    """
    if not 0 <= index < book.chapter_count:
        print(f"Error: chapter index {index} out of range (0-{book.chapter_count - 1})")
        return False
    print(render_chapter(book.chapters[index], book.resources))
    return True
