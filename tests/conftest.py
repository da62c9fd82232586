# tests/conftest.py
"""
Configuration globale pour pytest.

Fournit des fixtures réutilisables pour tous les tests, dont des
fabriques d'archives EPUB construites en mémoire.
"""

import io
import zipfile
from typing import Dict, Iterable, Optional, Tuple, Union

import pytest

PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDRfake-png"
JPEG_BYTES = b"\xff\xd8\xff\xe0fake-jpeg"
MP3_BYTES = b"ID3\x03\x00fake-mp3"
CSS_TEXT = "body { margin: 0; }"

CONTAINER_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">
  <rootfiles>
    <rootfile full-path="{opf_path}" media-type="application/oebps-package+xml"/>
  </rootfiles>
</container>
"""

OPF_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<package xmlns="http://www.idpf.org/2007/opf" version="3.0" unique-identifier="uid">
  <metadata xmlns:dc="http://purl.org/dc/elements/1.1/">
{metadata}
  </metadata>
  <manifest>
{manifest}
  </manifest>
  <spine>
{spine}
  </spine>
</package>
"""

XHTML_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<html xmlns="http://www.w3.org/1999/xhtml">
<head><title>{title}</title></head>
<body>{body}</body>
</html>
"""

DEFAULT_METADATA = """    <dc:title>Test Book</dc:title>
    <dc:creator>Test Author</dc:creator>
    <dc:language>fr</dc:language>
    <dc:identifier id="uid">urn:isbn:9781234567890</dc:identifier>"""

# (id, href, media-type, properties)
ManifestEntry = Tuple[str, str, str, Optional[str]]


def _manifest_xml(items: Iterable[ManifestEntry]) -> str:
    lines = []
    for item_id, href, media_type, properties in items:
        props = f' properties="{properties}"' if properties else ""
        lines.append(f'    <item id="{item_id}" href="{href}" media-type="{media_type}"{props}/>')
    return "\n".join(lines)


def _spine_xml(idrefs: Iterable[str]) -> str:
    return "\n".join(f'    <itemref idref="{idref}"/>' for idref in idrefs)


@pytest.fixture
def payloads() -> Dict[str, Union[str, bytes]]:
    """Contenus binaires d'exemple pour les ressources."""
    return {"png": PNG_BYTES, "jpeg": JPEG_BYTES, "mp3": MP3_BYTES, "css": CSS_TEXT}


@pytest.fixture
def build_opf():
    """Fabrique de documents de package."""

    def _build(items: Iterable[ManifestEntry], spine: Iterable[str], metadata: str = DEFAULT_METADATA) -> str:
        return OPF_TEMPLATE.format(
            metadata=metadata, manifest=_manifest_xml(items), spine=_spine_xml(spine)
        )

    return _build


@pytest.fixture
def xhtml():
    """Fabrique de documents de contenu XHTML."""

    def _build(body: str, title: str = "") -> str:
        return XHTML_TEMPLATE.format(title=title, body=body)

    return _build


@pytest.fixture
def make_epub():
    """
    Fabrique d'archives EPUB.

    Les entrées sont écrites telles quelles; container.xml est ajouté sauf
    si container=False.
    """

    def _build(
        entries: Dict[str, Union[str, bytes]],
        opf_path: str = "OEBPS/content.opf",
        container: bool = True,
    ) -> bytes:
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w") as zf:
            zf.writestr("mimetype", "application/epub+zip", compress_type=zipfile.ZIP_STORED)
            if container:
                zf.writestr("META-INF/container.xml", CONTAINER_TEMPLATE.format(opf_path=opf_path))
            for name, content in entries.items():
                zf.writestr(name, content)
        return buffer.getvalue()

    return _build


@pytest.fixture
def corrupt_entry():
    """
    Altère un octet du contenu d'une entrée stockée sans compression.

    Le CRC-32 enregistré ne correspond plus: la lecture de l'entrée échoue
    alors que l'archive reste ouvrable. Le contenu doit être unique dans
    l'archive.
    """

    def _corrupt(data: bytes, content: Union[str, bytes]) -> bytes:
        raw = content.encode("utf-8") if isinstance(content, str) else content
        offset = data.find(raw)
        assert offset >= 0, "contenu absent de l'archive"
        corrupted = bytearray(data)
        corrupted[offset + len(raw) // 2] ^= 0xFF
        return bytes(corrupted)

    return _corrupt


@pytest.fixture
def simple_epub(make_epub, build_opf, xhtml) -> bytes:
    """Un chapitre c1.xhtml qui référence l'image img1.png."""
    opf = build_opf(
        [
            ("c1", "c1.xhtml", "application/xhtml+xml", None),
            ("img1", "img1.png", "image/png", None),
        ],
        ["c1"],
    )
    return make_epub(
        {
            "OEBPS/content.opf": opf,
            "OEBPS/c1.xhtml": xhtml('<h1>Chapter One</h1><p><img src="img1.png" alt=""/></p>', "C1"),
            "OEBPS/img1.png": PNG_BYTES,
        }
    )


@pytest.fixture
def epub_file(tmp_path, simple_epub):
    """Écrit simple_epub sur le disque et renvoie son chemin."""
    path = tmp_path / "simple.epub"
    path.write_bytes(simple_epub)
    return str(path)


@pytest.fixture
def temp_dir(tmp_path):
    """Fournit un répertoire temporaire pour les tests."""
    return tmp_path
