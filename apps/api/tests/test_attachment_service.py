"""Unit tests for attachment storage helpers."""
import pytest

from agentcrm.services import attachment_service


@pytest.mark.parametrize("filename,expected", [
    ("invoice.pdf", "invoice.pdf"),
    ("../../etc/passwd", "passwd"),
    ("C:\\Users\\dana\\quote v2.pdf", "quote_v2.pdf"),
    ("..", "upload"),
    ("", "upload"),
    (None, "upload"),
])
def test_safe_basename(filename, expected):
    assert attachment_service.safe_basename(filename) == expected


def test_content_length_limit():
    assert not attachment_service.content_length_exceeds_limit(None, max_size_bytes=10)
    assert not attachment_service.content_length_exceeds_limit("abc", max_size_bytes=10)
    assert not attachment_service.content_length_exceeds_limit("100", max_size_bytes=10, overhead_bytes=100)
    assert attachment_service.content_length_exceeds_limit("111", max_size_bytes=10, overhead_bytes=100)


def test_resolve_upload_path(tmp_path):
    root = tmp_path / "uploads"
    (root / "quotes").mkdir(parents=True)
    stored = root / "quotes" / "1-q.pdf"
    stored.write_bytes(b"q")
    (tmp_path / "outside.txt").write_text("x")

    assert attachment_service.resolve_upload_path(root, "quotes/1-q.pdf") == stored.resolve()
    assert attachment_service.resolve_upload_path(root, "quotes/missing.pdf") is None
    assert attachment_service.resolve_upload_path(root, "quotes") is None
    assert attachment_service.resolve_upload_path(root, "../outside.txt") is None


def test_purge_attachment(tmp_path):
    root = tmp_path / "uploads"
    (root / "payments").mkdir(parents=True)
    stored = root / "payments" / "1-inv.pdf"
    stored.write_bytes(b"inv")

    assert attachment_service.purge_attachment(root, "https://example.com/inv.pdf") is False
    assert attachment_service.purge_attachment(root, None) is False
    assert attachment_service.purge_attachment(root, "/uploads/payments/missing.pdf") is False
    assert attachment_service.purge_attachment(root, "/uploads/payments/1-inv.pdf") is True
    assert not stored.exists()


def test_is_managed():
    assert attachment_service.is_managed("/uploads/quotes/1-q.pdf")
    assert not attachment_service.is_managed("https://example.com/q.pdf")
    assert not attachment_service.is_managed("")
