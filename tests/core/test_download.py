"""
Unit tests for download module.

Tests network primitives with mocked HTTP responses.
"""

import pytest
import requests
import responses

from zigvm.core.download import (
    DownloadProgress,
    download_file,
    fetch_json,
    fetch_text,
    format_progress,
    probe_url,
)
from zigvm.core.exceptions import DownloadError

URL = "https://example.com/zig-linux-x86_64-0.13.0.tar.xz"


class TestProbeUrl:
    """Test probe_url()."""

    @responses.activate
    def test_existing(self):
        responses.add(responses.HEAD, URL, status=200)
        assert probe_url(URL) is True

    @responses.activate
    def test_missing(self):
        responses.add(responses.HEAD, URL, status=404)
        assert probe_url(URL) is False

    @responses.activate
    def test_follows_redirect(self):
        target = "https://cdn.example.com/zig.tar.xz"
        responses.add(
            responses.HEAD, URL, status=302, headers={"Location": target}
        )
        responses.add(responses.HEAD, target, status=200)
        assert probe_url(URL) is True

    @responses.activate
    def test_connection_error_propagates(self):
        responses.add(
            responses.HEAD, URL, body=requests.exceptions.ConnectionError("refused")
        )
        with pytest.raises(requests.exceptions.ConnectionError):
            probe_url(URL)


class TestDownloadFile:
    """Test download_file()."""

    @responses.activate
    def test_simple_download(self, tmp_path):
        content = b"archive bytes" * 1000
        destination = tmp_path / "out" / "archive"
        responses.add(
            responses.GET,
            URL,
            body=content,
            status=200,
            headers={"content-length": str(len(content))},
        )

        result = download_file(URL, destination)

        assert result == destination
        assert destination.read_bytes() == content

    @responses.activate
    def test_overwrites_existing_file(self, tmp_path):
        destination = tmp_path / "archive"
        destination.write_bytes(b"stale contents that are longer")
        responses.add(responses.GET, URL, body=b"new", status=200)

        download_file(URL, destination)

        assert destination.read_bytes() == b"new"

    @responses.activate
    def test_http_error_raises(self, tmp_path):
        responses.add(responses.GET, URL, status=500)
        with pytest.raises(requests.exceptions.HTTPError):
            download_file(URL, tmp_path / "archive")

    @responses.activate
    def test_progress_callback_reports_completion(self, tmp_path):
        content = b"x" * 20000
        responses.add(
            responses.GET,
            URL,
            body=content,
            status=200,
            headers={"content-length": str(len(content))},
        )
        updates = []

        download_file(URL, tmp_path / "archive", progress_callback=updates.append)

        assert updates
        assert updates[-1].bytes_downloaded == len(content)
        assert updates[-1].percentage == pytest.approx(100.0)


class TestFetchDocuments:
    """Test fetch_text() and fetch_json()."""

    @responses.activate
    def test_fetch_text(self):
        responses.add(responses.GET, URL, body="line1\nline2\n", status=200)
        assert fetch_text(URL) == "line1\nline2\n"

    @responses.activate
    def test_fetch_text_error(self):
        responses.add(responses.GET, URL, status=503)
        with pytest.raises(DownloadError, match="Failed to fetch"):
            fetch_text(URL)

    @responses.activate
    def test_fetch_json(self):
        responses.add(responses.GET, URL, json={"master": {"version": "0.14.0-dev.1+abc"}})
        assert fetch_json(URL)["master"]["version"] == "0.14.0-dev.1+abc"

    @responses.activate
    def test_fetch_json_invalid(self):
        responses.add(responses.GET, URL, body="<html>", status=200)
        with pytest.raises(DownloadError, match="Invalid JSON"):
            fetch_json(URL)


class TestFormatProgress:
    """Test format_progress function."""

    def test_format_with_known_size(self):
        progress = DownloadProgress(
            bytes_downloaded=10485760,  # 10 MB
            total_bytes=104857600,  # 100 MB
            percentage=10.0,
            speed_bps=2097152,  # 2 MB/s
            eta_seconds=45,
        )

        result = format_progress(progress)

        assert "10.0/100.0 MB" in result
        assert "(10.0%)" in result
        assert "2.0 MB/s" in result
        assert "ETA: 45s" in result

    def test_format_with_unknown_size(self):
        progress = DownloadProgress(
            bytes_downloaded=10485760,
            total_bytes=0,
            percentage=0.0,
            speed_bps=1048576,
            eta_seconds=0,
        )

        result = str(progress)

        assert "10.0 MB" in result
        assert "ETA" not in result
