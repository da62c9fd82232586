"""
Configuration et constantes pour EPUB Ingest
"""

import os

# ---------- Conteneur EPUB ----------
CONTAINER_PATH = "META-INF/container.xml"
CONTAINER_ERROR_MESSAGE = "Invalid EPUB: could not find container descriptor"

# ---------- Types de contenu ----------
XHTML_MEDIA_TYPE = "application/xhtml+xml"
RESOURCE_MEDIA_PREFIXES = ("image/", "audio/")
RESOURCE_MEDIA_TYPES = ("text/css",)

# ---------- Couverture ----------
COVER_PROPERTY = "cover-image"
COVER_IDS = ("cover", "cover-image")

# ---------- Métadonnées par défaut ----------
DEFAULT_TITLE = "Unknown Title"
DEFAULT_AUTHOR = "Unknown Author"
DEFAULT_LANGUAGE = "en"
DEFAULT_IDENTIFIER = ""

# Ordre de recherche des titres de chapitre
CHAPTER_TITLE_TAGS = ("h1", "h2", "h3", "title")
CHAPTER_TITLE_FALLBACK = "Chapter {number}"

# ---------- Lecteur audio ----------
AUDIO_PRELOAD = "metadata"
AUDIO_STYLE = "width: 100%; max-width: 400px; margin: 1rem 0;"

# ---------- Configuration logging ----------
LOG_DIR = "logs"
LOG_MAX_BYTES = 5 * 1024 * 1024  # 5MB
LOG_BACKUP_COUNT = 5
LOG_ENCODING = "utf-8"


# ---------- Initialisation des dossiers ----------
def ensure_directories():
    """Crée les dossiers nécessaires s'ils n'existent pas."""
    os.makedirs(LOG_DIR, exist_ok=True)
