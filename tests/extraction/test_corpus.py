# ABOUTME: Tests for the forward-only corpus scanner
# ABOUTME: Marker search across chunk boundaries, bounded reads and compressed inputs

import bz2
import gzip
import io

import pytest

from wikitaxon.extraction import CorpusReadError, CorpusReader, open_corpus


def reader(text: str, chunk_size: int = 4) -> CorpusReader:
    return CorpusReader(io.StringIO(text), chunk_size=chunk_size)


class FailingStream(io.StringIO):
    def read(self, size=-1):
        raise OSError("disk on fire")


class TestFind:
    """Test marker search."""

    def test_nearest_marker_wins(self):
        """Test that the index of the first occurring marker is returned."""
        r = reader("abc [[link]] <title>T</title>")
        assert r.find("<title>", "[[") == 1
        assert r.find("<title>", "[[") == 0
        assert r.find("<title>", "[[") == -1
        assert r.find("[[") == -1

    @pytest.mark.parametrize("chunk_size", [1, 2, 3, 5, 7, 64])
    def test_markers_across_chunk_boundaries(self, chunk_size):
        """Test that markers split between chunks are found."""
        r = reader("xx<title>Foo</title>yy[[Category:Bar]]", chunk_size)
        assert r.find("<title>", "[[") == 0
        assert r.read_to_string("</title>") == "Foo"
        assert r.find("<title>", "[[") == 1
        assert r.read_to("]", "|") == "Category:Bar"

    def test_ignore_case(self):
        """Test case-insensitive marker search."""
        r = reader("<TITLE>Foo</title>")
        assert r.find("<title>") == -1

        r = reader("<TITLE>Foo</title>")
        assert r.find_ignore_case("<title>") == 0
        assert r.read_to_string("</title>") == "Foo"

    def test_empty_stream(self):
        """Test searching an empty stream."""
        assert reader("").find("[[") == -1


class TestReadTo:
    """Test reading up to terminators."""

    def test_first_terminator(self):
        """Test that the nearer terminator ends the text and is consumed."""
        r = reader("Category:Foo|sort key]] rest")
        assert r.read_to("]", "|") == "Category:Foo"
        assert r.read_to("]") == "sort key"

    def test_limit_exceeded(self):
        """Test that nothing is consumed when the terminator is too far away."""
        r = reader("a" * 50 + "]")
        assert r.read_to("]", limit=10) is None
        assert r.read_to("]") == "a" * 50

    def test_missing_terminator(self):
        """Test that an unterminated read at the end yields None."""
        r = reader("no terminator here")
        assert r.read_to("]") is None
        assert r.find("[[") == -1

    def test_read_to_string_limit(self):
        """Test the bounded read of a terminator string."""
        r = reader("Foo</title>")
        assert r.read_to_string("</title>", limit=3) == "Foo"

        r = reader("Foobar</title>")
        assert r.read_to_string("</title>", limit=3) is None

    @pytest.mark.parametrize("chunk_size", [1, 3, 64])
    def test_read_to_string_ignore_case(self, chunk_size):
        """Test that a terminator string can be matched in any case."""
        r = reader("Foo</TITLE>bar</Title>", chunk_size)
        assert r.read_to_string("</title>", ignore_case=True) == "Foo"
        assert r.read_to_string("</title>", ignore_case=True) == "bar"

        r = reader("Foo</TITLE>", chunk_size)
        assert r.read_to_string("</title>") is None


class TestErrors:
    """Test failing inputs."""

    def test_read_error(self):
        """Test that stream errors are raised as corpus errors."""
        with pytest.raises(CorpusReadError):
            CorpusReader(FailingStream()).find("[[")

    def test_missing_file(self, tmp_path):
        """Test that a missing corpus cannot be opened."""
        with pytest.raises(CorpusReadError):
            with open_corpus(tmp_path / "missing.xml"):
                pass


class TestOpenCorpus:
    """Test opening plain and compressed corpus files."""

    TEXT = "<title>Zürich</title>"

    def test_plain(self, tmp_path):
        """Test a plain text corpus."""
        path = tmp_path / "pages.xml"
        path.write_text(self.TEXT, encoding="utf-8")
        with open_corpus(path) as r:
            assert r.find("<title>") == 0
            assert r.read_to_string("</title>") == "Zürich"

    def test_bz2(self, tmp_path):
        """Test a bzip2 compressed corpus."""
        path = tmp_path / "pages.xml.bz2"
        path.write_bytes(bz2.compress(self.TEXT.encode("utf-8")))
        with open_corpus(path) as r:
            assert r.find("<title>") == 0
            assert r.read_to_string("</title>") == "Zürich"

    def test_gzip(self, tmp_path):
        """Test a gzip compressed corpus."""
        path = tmp_path / "pages.xml.gz"
        path.write_bytes(gzip.compress(self.TEXT.encode("utf-8")))
        with open_corpus(path) as r:
            assert r.find("<title>") == 0
            assert r.read_to_string("</title>") == "Zürich"
