"""
Unit tests for services.attachments.
"""
import io
import os

import pytest
from fastapi import UploadFile

from noticeboard.services.attachments import AttachmentError, delete_attachment, save_upload


def make_upload(name: str, data: bytes) -> UploadFile:
    return UploadFile(file=io.BytesIO(data), filename=name)


class TestSaveUpload:

    @pytest.mark.asyncio
    async def test_saves_pdf_under_random_name(self, tmp_path):
        url, original = await save_upload(make_upload("timetable.pdf", b"%PDF-1.4"), str(tmp_path), 1024)
        assert url.startswith("/uploads/")
        assert url.endswith(".pdf")
        assert original == "timetable.pdf"
        stored = tmp_path / url.rsplit("/", 1)[1]
        assert stored.read_bytes() == b"%PDF-1.4"

    @pytest.mark.asyncio
    async def test_extension_check_is_case_insensitive(self, tmp_path):
        url, _ = await save_upload(make_upload("Poster.JPG", b"jpg"), str(tmp_path), 1024)
        assert url.endswith(".jpg")

    @pytest.mark.asyncio
    async def test_creates_missing_directory(self, tmp_path):
        target = tmp_path / "nested" / "uploads"
        await save_upload(make_upload("a.png", b"png"), str(target), 1024)
        assert len(os.listdir(target)) == 1

    @pytest.mark.asyncio
    async def test_rejects_disallowed_type(self, tmp_path):
        with pytest.raises(AttachmentError) as excinfo:
            await save_upload(make_upload("run.exe", b"MZ"), str(tmp_path), 1024)
        assert excinfo.value.code == "ATTACHMENT_TYPE_NOT_ALLOWED"
        assert os.listdir(tmp_path) == []

    @pytest.mark.asyncio
    async def test_rejects_oversized_file(self, tmp_path):
        upload = make_upload("big.png", b"x" * 2048)
        with pytest.raises(AttachmentError) as excinfo:
            await save_upload(upload, str(tmp_path), 1024)
        assert excinfo.value.code == "ATTACHMENT_TOO_LARGE"
        assert os.listdir(tmp_path) == []
        # stopped reading one byte past the limit
        assert upload.file.tell() == 1025

    @pytest.mark.asyncio
    async def test_file_at_exact_limit_is_accepted(self, tmp_path):
        url, _ = await save_upload(make_upload("fits.png", b"x" * 1024), str(tmp_path), 1024)
        assert (tmp_path / url.rsplit("/", 1)[1]).stat().st_size == 1024

    @pytest.mark.asyncio
    async def test_strips_directories_from_filename(self, tmp_path):
        _, original = await save_upload(make_upload("../../etc/notes.pdf", b"%PDF"), str(tmp_path), 1024)
        assert original == "notes.pdf"


class TestDeleteAttachment:

    def test_removes_stored_file(self, tmp_path):
        (tmp_path / "abc.pdf").write_bytes(b"%PDF")
        assert delete_attachment("/uploads/abc.pdf", str(tmp_path)) is True
        assert not (tmp_path / "abc.pdf").exists()

    def test_missing_file_returns_false(self, tmp_path):
        assert delete_attachment("/uploads/missing.pdf", str(tmp_path)) is False

    @pytest.mark.parametrize("url", [None, "", "https://example.com/a.pdf"])
    def test_ignores_foreign_urls(self, tmp_path, url):
        assert delete_attachment(url, str(tmp_path)) is False
