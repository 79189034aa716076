"""Tests for the deno binary download helper."""

import io
import os
import zipfile
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from jsrcli.config_manager import Settings
from jsrcli.download import (
    DENO_RELEASE_VERSION,
    DownloadInfo,
    download_deno,
    get_deno_bin_path,
    get_deno_download_url,
)
from jsrcli.utils.exceptions import RegistryNetworkError, UnsupportedPlatformError


def zip_bytes(name="deno", content=b"#!/bin/sh\necho deno\n"):
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        zf.writestr(name, content)
    return buffer.getvalue()


def make_response(status_code=200, text="", body=b""):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.text = text
    response.headers = {"content-length": str(len(body))}
    response.iter_content.return_value = [body]
    return response


@pytest.fixture
def linux_x64():
    with patch("jsrcli.download.current_platform", return_value=("linux", "x64")):
        yield


class TestDownloadUrl:
    def test_release_is_pinned(self, linux_x64):
        info = get_deno_download_url(False, MagicMock())
        assert info.version == DENO_RELEASE_VERSION
        assert info.url == (
            f"https://dl.deno.land/release/{DENO_RELEASE_VERSION}/deno-x86_64-unknown-linux-gnu.zip"
        )
        assert info.canary is False

    def test_canary_reads_latest_hash(self, linux_x64):
        session = MagicMock()
        session.get.return_value = make_response(text="abc123\n")
        info = get_deno_download_url(True, session)
        assert info.version == "abc123"
        assert info.url == "https://dl.deno.land/canary/abc123/deno-x86_64-unknown-linux-gnu.zip"

    def test_canary_lookup_failure(self, linux_x64):
        session = MagicMock()
        response = make_response(status_code=503)
        session.get.return_value = response
        with pytest.raises(RegistryNetworkError):
            get_deno_download_url(True, session)
        response.close.assert_called_once()

    def test_unsupported_platform(self):
        with patch("jsrcli.download.current_platform", return_value=("sunos", "sparc")):
            with pytest.raises(UnsupportedPlatformError):
                get_deno_download_url(False, MagicMock())


class TestDownload:
    def test_extracts_and_marks_executable(self, tmp_path):
        session = MagicMock()
        session.get.return_value = make_response(body=zip_bytes())
        bin_path = tmp_path / "v2.3.7" / "deno"
        info = DownloadInfo(url="https://dl.deno.land/x.zip", filename="x.zip", version="v2.3.7", canary=False)

        download_deno(bin_path, info, session)

        assert bin_path.is_file()
        assert os.access(bin_path, os.X_OK)
        assert not (tmp_path / "v2.3.7" / "x.zip").exists()
        assert not (tmp_path / "v2.3.7" / "x.zip.part").exists()

    def test_http_error(self, tmp_path):
        session = MagicMock()
        session.get.return_value = make_response(status_code=404)
        info = DownloadInfo(url="https://dl.deno.land/x.zip", filename="x.zip", version="v1", canary=False)
        with pytest.raises(RegistryNetworkError):
            download_deno(tmp_path / "deno", info, session)


class TestGetDenoBinPath:
    def test_env_override_skips_download(self):
        session = MagicMock()
        assert get_deno_bin_path(Settings(deno_bin_path="/opt/deno"), session=session) == "/opt/deno"
        session.get.assert_not_called()

    def test_cached_binary_is_reused(self, tmp_path, linux_x64):
        cached = tmp_path / DENO_RELEASE_VERSION / "deno"
        cached.parent.mkdir(parents=True)
        cached.write_text("")
        session = MagicMock()
        with patch("jsrcli.download.deno_executable_name", return_value="deno"):
            result = get_deno_bin_path(Settings(cache_dir=str(tmp_path)), session=session)
        assert Path(result) == cached
        session.get.assert_not_called()

    def test_downloads_when_missing(self, tmp_path, linux_x64):
        session = MagicMock()
        with patch("jsrcli.download.deno_executable_name", return_value="deno"), patch(
            "jsrcli.download.download_deno"
        ) as download:
            result = get_deno_bin_path(Settings(cache_dir=str(tmp_path)), session=session)
        assert Path(result) == tmp_path / DENO_RELEASE_VERSION / "deno"
        download.assert_called_once()
