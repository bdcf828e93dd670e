"""
Local-disk stand-in for object storage: images and 3D models for menus.
"""
import logging
import os
import re
import uuid

from django.conf import settings
from django.core.files.storage import default_storage
from rest_framework import status
from rest_framework.exceptions import APIException

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = frozenset({"jpeg", "jpg", "png", "gif", "webp", "glb", "gltf"})
ALLOWED_TYPES_RE = re.compile(r"jpeg|jpg|png|gif|webp|glb|gltf")


class UploadRejected(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid file type'
    default_code = 'upload_rejected'


def _extension(name):
    return os.path.splitext(name or "")[1].lower().lstrip(".")


def validate_upload(upload):
    """Reject files over the size ceiling or outside the image/3D allow-list"""
    max_size = settings.MENU_UPLOAD_MAX_SIZE
    if upload.size > max_size:
        logger.warning(f"Rejected upload {upload.name!r}: {upload.size} bytes exceeds {max_size}")
        raise UploadRejected(f"File exceeds the {max_size // (1024 * 1024)} MB limit.", code='file_too_large')

    extension = _extension(upload.name)
    content_type = (getattr(upload, 'content_type', None) or '').lower()
    # image/png, model/gltf-binary, model/gltf+json...
    type_ok = bool(ALLOWED_TYPES_RE.search(content_type))

    if extension not in ALLOWED_EXTENSIONS or not type_ok:
        logger.warning(f"Rejected upload {upload.name!r} ({content_type or 'no content type'})")
        raise UploadRejected()


def store_upload(upload, storage=None):
    """Persist a validated upload under a random name and return its public URL"""
    storage = storage or default_storage
    name = f"{uuid.uuid4().hex}.{_extension(upload.name)}"
    saved_name = storage.save(name, upload)
    url = storage.url(saved_name)
    logger.info(f"Stored upload {upload.name!r} as {saved_name} ({upload.size} bytes)")
    return url
