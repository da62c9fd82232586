# tests/core/test_chapters.py
"""
Tests pour le module core.epub.chapters.
"""

import asyncio

from epub_ingest.core.epub.archive import ArchiveReader
from epub_ingest.core.epub.chapters import derive_title, extract_chapters
from epub_ingest.core.epub.container import resolve_package_path
from epub_ingest.core.epub.markup import parse_markup
from epub_ingest.core.epub.package import load_package_document

XHTML = "application/xhtml+xml"


async def _extract_async(data: bytes):
    with ArchiveReader(data) as archive:
        opf_path, opf_dir = await resolve_package_path(archive)
        package = await load_package_document(archive, opf_path, opf_dir)
        return await extract_chapters(archive, package)


def _extract(data: bytes):
    return asyncio.run(_extract_async(data))


class TestExtractChapters:
    """Tests pour extract_chapters."""

    def test_order_is_spine_position(self, make_epub, build_opf, xhtml):
        """Test que l'ordre reflète la position dans le spine (avec trous)."""
        opf = build_opf(
            [
                ("ncx", "toc.ncx", "application/x-dtbncx+xml", None),
                ("c1", "c1.xhtml", XHTML, None),
                ("c2", "c2.xhtml", XHTML, None),
            ],
            ["ncx", "c1", "ghost", "c2"],
        )
        data = make_epub(
            {
                "OEBPS/content.opf": opf,
                "OEBPS/toc.ncx": "<ncx/>",
                "OEBPS/c1.xhtml": xhtml("<h1>One</h1>"),
                "OEBPS/c2.xhtml": xhtml("<h1>Two</h1>"),
            }
        )
        chapters, skipped = _extract(data)

        assert [c.id for c in chapters] == ["c1", "c2"]
        assert [c.order for c in chapters] == [1, 3]
        assert [c.href for c in chapters] == ["OEBPS/c1.xhtml", "OEBPS/c2.xhtml"]
        # Le NCX n'est pas du contenu: ignoré sans trace; l'id fantôme est tracé
        assert [(s.kind, s.key) for s in skipped] == [("chapter", "ghost")]

    def test_missing_entry_drops_only_that_chapter(self, make_epub, build_opf, xhtml):
        opf = build_opf(
            [("c1", "c1.xhtml", XHTML, None), ("c2", "c2.xhtml", XHTML, None)],
            ["c1", "c2"],
        )
        data = make_epub({"OEBPS/content.opf": opf, "OEBPS/c2.xhtml": xhtml("<p>Two</p>")})
        chapters, skipped = _extract(data)

        assert [c.id for c in chapters] == ["c2"]
        assert chapters[0].order == 1
        assert len(skipped) == 1
        assert skipped[0].key == "c1"
        assert "OEBPS/c1.xhtml" in skipped[0].reason

    def test_corrupted_entry_drops_only_that_chapter(self, make_epub, build_opf, xhtml, corrupt_entry):
        """Test qu'un chapitre au CRC invalide est écarté sans bloquer les autres."""
        opf = build_opf(
            [("c1", "c1.xhtml", XHTML, None), ("c2", "c2.xhtml", XHTML, None)],
            ["c1", "c2"],
        )
        broken = xhtml("<p>First chapter, damaged on disk</p>")
        data = make_epub(
            {
                "OEBPS/content.opf": opf,
                "OEBPS/c1.xhtml": broken,
                "OEBPS/c2.xhtml": xhtml("<p>Two</p>"),
            }
        )
        chapters, skipped = _extract(corrupt_entry(data, broken))

        assert [c.id for c in chapters] == ["c2"]
        assert [(s.kind, s.key) for s in skipped] == [("chapter", "c1")]
        assert "OEBPS/c1.xhtml" in skipped[0].reason

    def test_malformed_chapter_is_dropped(self, make_epub, build_opf, xhtml):
        """Test qu'un XHTML mal formé n'interrompt pas l'analyse."""
        opf = build_opf(
            [("bad", "bad.xhtml", XHTML, None), ("good", "good.xhtml", XHTML, None)],
            ["bad", "good"],
        )
        data = make_epub(
            {
                "OEBPS/content.opf": opf,
                "OEBPS/bad.xhtml": "<html><body><p>unclosed</body></html>",
                "OEBPS/good.xhtml": xhtml("<p>ok</p>"),
            }
        )
        chapters, skipped = _extract(data)

        assert [c.id for c in chapters] == ["good"]
        assert [(s.kind, s.key) for s in skipped] == [("chapter", "bad")]

    def test_empty_spine_gives_no_chapters(self, make_epub, build_opf):
        data = make_epub({"OEBPS/content.opf": build_opf([], [])})
        assert _extract(data) == ([], [])

    def test_content_is_body_inner_markup(self, make_epub, build_opf, xhtml):
        opf = build_opf([("c1", "c1.xhtml", XHTML, None)], ["c1"])
        data = make_epub(
            {"OEBPS/content.opf": opf, "OEBPS/c1.xhtml": xhtml("<h1>Title</h1><p>Hello</p>", "T")}
        )
        chapters, _ = _extract(data)
        content = chapters[0].content

        assert content == "<h1>Title</h1><p>Hello</p>"
        assert "xmlns" not in content

    def test_document_without_body_keeps_raw_text(self, make_epub, build_opf):
        """Test repli sur le document brut quand il n'y a pas de body."""
        raw = '<html xmlns="http://www.w3.org/1999/xhtml"><head><title>Only Head</title></head></html>'
        opf = build_opf([("c1", "c1.xhtml", XHTML, None)], ["c1"])
        data = make_epub({"OEBPS/content.opf": opf, "OEBPS/c1.xhtml": raw})
        chapters, _ = _extract(data)

        assert chapters[0].content == raw
        assert chapters[0].title == "Only Head"


class TestDeriveTitle:
    """Tests pour derive_title."""

    def _doc(self, head: str, body: str):
        return parse_markup(
            f'<html xmlns="http://www.w3.org/1999/xhtml"><head>{head}</head><body>{body}</body></html>'
        )

    def test_h1_has_priority_over_earlier_headings(self):
        root = self._doc("<title>Doc</title>", "<h2>Second</h2><h1>First</h1>")
        assert derive_title(root, 0) == "First"

    def test_h2_then_h3_then_title(self):
        assert derive_title(self._doc("<title>Doc</title>", "<h3>Three</h3><h2>Two</h2>"), 0) == "Two"
        assert derive_title(self._doc("<title>Doc</title>", "<h3>Three</h3>"), 0) == "Three"
        assert derive_title(self._doc("<title>Doc</title>", "<p>x</p>"), 0) == "Doc"

    def test_empty_heading_is_skipped(self):
        root = self._doc("<title>Doc</title>", "<h1>  </h1><h2><span>Nested</span> text</h2>")
        assert derive_title(root, 0) == "Nested text"

    def test_fallback_uses_one_based_position(self):
        root = self._doc("<title></title>", "<p>no heading</p>")
        assert derive_title(root, 4) == "Chapter 5"
