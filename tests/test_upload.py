"""
Upload endpoint tests (/api/upload).

Covers:
  - image and 3D model uploads land under MEDIA_ROOT with a random name
  - size ceiling, extension and content type checks (400, nothing stored)
  - authentication required
"""

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile


pytestmark = pytest.mark.django_db

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


@pytest.fixture
def media_root(settings, tmp_path):
    settings.MEDIA_ROOT = tmp_path
    return tmp_path


def _upload(client, name, content, content_type):
    return client.post(
        "/api/upload",
        {"file": SimpleUploadedFile(name, content, content_type=content_type)},
        format="multipart",
    )


def test_upload_image(owner_client, media_root):
    response = _upload(owner_client, "soup.png", PNG_BYTES, "image/png")

    assert response.status_code == 200
    url = response.json()["url"]
    assert url.startswith("/uploads/")
    assert url.endswith(".png")
    assert "soup" not in url

    stored = media_root / url.rsplit("/", 1)[1]
    assert stored.read_bytes() == PNG_BYTES


def test_upload_glb_model(owner_client, media_root):
    response = _upload(owner_client, "burger.glb", b"glTF\x02\x00\x00\x00", "model/gltf-binary")

    assert response.status_code == 200
    assert response.json()["url"].endswith(".glb")
    assert len(list(media_root.iterdir())) == 1


def test_upload_names_do_not_collide(owner_client, media_root):
    first = _upload(owner_client, "soup.png", PNG_BYTES, "image/png").json()["url"]
    second = _upload(owner_client, "soup.png", PNG_BYTES, "image/png").json()["url"]

    assert first != second
    assert len(list(media_root.iterdir())) == 2


def test_upload_too_large(owner_client, media_root, settings):
    content = b"\x00" * (settings.MENU_UPLOAD_MAX_SIZE + 1)

    response = _upload(owner_client, "huge.png", content, "image/png")

    assert response.status_code == 400
    assert "10 MB" in response.json()["details"]["detail"]
    assert list(media_root.iterdir()) == []


@pytest.mark.parametrize("name,content_type", [
    ("tool.exe", "application/octet-stream"),
    ("notes.png", "text/plain"),
    ("photo.bmp", "image/bmp"),
    ("noextension", "image/png"),
])
def test_upload_rejects_disallowed_files(owner_client, media_root, name, content_type):
    response = _upload(owner_client, name, PNG_BYTES, content_type)

    assert response.status_code == 400
    body = response.json()
    assert body["error"] is True
    assert body["details"]["detail"] == "Invalid file type"
    assert list(media_root.iterdir()) == []


def test_upload_requires_file(owner_client, media_root):
    response = owner_client.post("/api/upload", {}, format="multipart")

    assert response.status_code == 400
    assert "file" in response.json()["details"]


def test_upload_requires_authentication(api_client, media_root):
    response = _upload(api_client, "soup.png", PNG_BYTES, "image/png")

    assert response.status_code == 401
    assert list(media_root.iterdir()) == []
