from vendorcomply.services.file_storage import _sanitize_filename, delete_upload, save_upload


def test_sanitize_filename():
    assert _sanitize_filename("ISO cert (2026).pdf") == "ISO_cert_2026.pdf"
    assert _sanitize_filename("../../etc/passwd") == "....etcpasswd"
    assert _sanitize_filename("***") == "upload"


def test_save_upload_returns_relative_path(tmp_path):
    stored = save_upload(b"abc", "iso cert.pdf", tmp_path, "vendor-1")

    assert stored.file_name == "iso cert.pdf"
    assert stored.file_size == 3
    assert not stored.file_path.startswith("/")
    assert stored.file_path.endswith("_iso_cert.pdf")
    assert "/vendor-1/" in stored.file_path
    assert (tmp_path / stored.file_path).read_bytes() == b"abc"


def test_delete_upload(tmp_path):
    stored = save_upload(b"abc", "iso.pdf", tmp_path, "vendor-1")

    assert delete_upload(stored.file_path, tmp_path) is True
    assert not (tmp_path / stored.file_path).exists()
    assert delete_upload(stored.file_path, tmp_path) is False


def test_delete_upload_stays_inside_root(tmp_path):
    outside = tmp_path / "secret.txt"
    outside.write_text("keep")
    root = tmp_path / "uploads"
    root.mkdir()

    assert delete_upload("../secret.txt", root) is False
    assert outside.exists()
