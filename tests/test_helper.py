"""
Tests for output helpers and cached downloads.
"""

from unittest.mock import patch, MagicMock

import pytest
import requests

from cryptopals.errors import DownloadError
from cryptopals import helper
from cryptopals.helper import cache_path, fetch_text, read_from_url, section, subsection


URL = "https://example.invalid/data/4.txt"


def http_response(content: bytes):
    response = MagicMock()
    response.content = content
    return response


class TestOutput:
    """Tests for section and subsection titles."""

    def test_section(self, capsys):
        """The title is boxed."""
        section("Statistics")
        assert capsys.readouterr().out == "\n+------------+\n| Statistics |\n+------------+\n"

    def test_subsection(self, capsys):
        """The title is underlined, colon included."""
        subsection("Permutations")
        assert capsys.readouterr().out == "\nPermutations:\n-------------\n\n"


class TestFetchText:
    """Tests for downloads and the cache directory."""

    def test_cache_path(self, tmp_path):
        """Cache files are named after the URL digest."""
        path = cache_path(URL, tmp_path, "cryptopals-data")
        assert path.parent == tmp_path
        assert path.name.startswith("cryptopals-data-")
        assert len(path.name) == len("cryptopals-data-") + 16 + len(".txt")

    def test_no_cache_dir(self, tmp_path):
        """Without a cache directory every call downloads."""
        with patch("cryptopals.helper.requests.get", return_value=http_response(b"body\n")) as get:
            assert fetch_text(URL) == "body\n"
            assert fetch_text(URL) == "body\n"
        assert get.call_count == 2

    def test_cached_read_keeps_line_endings(self, tmp_path):
        """A cached read returns exactly what the download returned."""
        body = b"line one\r\nline two\r\n"
        with patch("cryptopals.helper.requests.get", return_value=http_response(body)) as get:
            first = fetch_text(URL, tmp_path)
            second = fetch_text(URL, tmp_path)

        assert get.call_count == 1
        assert first == "line one\r\nline two\r\n"
        assert second == first
        assert cache_path(URL, tmp_path).read_bytes() == body

    def test_unreadable_cache_downloads_again(self, tmp_path):
        """A cache path that cannot be read is not an error."""
        cache_path(URL, tmp_path).mkdir()
        with patch("cryptopals.helper.requests.get", return_value=http_response(b"fresh\n")) as get:
            assert fetch_text(URL, tmp_path) == "fresh\n"
        assert get.call_count == 1

    def test_failed_write_leaves_no_file(self, tmp_path):
        """An interrupted cache write leaves neither a partial cache file nor a temporary file."""
        with patch("cryptopals.helper.requests.get", return_value=http_response(b"body\n")), \
                patch("cryptopals.helper.os.replace", side_effect=OSError("disk full")):
            assert fetch_text(URL, tmp_path) == "body\n"
        assert list(tmp_path.iterdir()) == []

    def test_write_leaves_only_cache_file(self, tmp_path):
        """No temporary file remains after a successful write."""
        with patch("cryptopals.helper.requests.get", return_value=http_response(b"body\n")):
            fetch_text(URL, tmp_path)
        assert list(tmp_path.iterdir()) == [cache_path(URL, tmp_path)]

    def test_download_error(self, tmp_path):
        """HTTP errors become DownloadError and nothing is cached."""
        response = http_response(b"")
        response.raise_for_status.side_effect = requests.HTTPError("404 Not Found")
        with patch("cryptopals.helper.requests.get", return_value=response):
            with pytest.raises(DownloadError, match="404"):
                read_from_url(URL, tmp_path)
        assert not cache_path(URL, tmp_path).exists()

    def test_timeout_passed_on(self, tmp_path):
        """The configured timeout reaches requests."""
        with patch.object(helper.requests, "get", return_value=http_response(b"x")) as get:
            read_from_url(URL, tmp_path, timeout=2.5)
        assert get.call_args[1]["timeout"] == 2.5
