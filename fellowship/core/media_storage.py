# File: fellowship/core/media_storage.py
import logging
from dataclasses import dataclass
from typing import BinaryIO, Optional

import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError

from fellowship.core.config import settings
from fellowship.core.exceptions import ServerError

logger = logging.getLogger(__name__)


@dataclass
class StoredMedia:
    url: str
    public_id: str
    thumbnail_url: Optional[str] = None


class MediaStorage:
    """Upload sink backed by Cloudinary; returns the public URL of the stored file."""

    def __init__(self):
        cloudinary.config(
            cloud_name=settings.CLOUDINARY_CLOUD_NAME,
            api_key=settings.CLOUDINARY_API_KEY,
            api_secret=settings.CLOUDINARY_API_SECRET,
            secure=True,
        )
        self.folder = settings.CLOUDINARY_FOLDER

    def upload(self, file_obj: BinaryIO, *, file_name: str, resource_type: str, tenant_id: str) -> StoredMedia:
        try:
            result = cloudinary.uploader.upload(
                file_obj,
                folder=f"{self.folder}/{tenant_id}",
                resource_type=resource_type,
                use_filename=True,
                unique_filename=True,
                overwrite=False,
                filename_override=file_name,
            )
        except CloudinaryError:
            logger.exception(f"Media upload failed for {file_name}")
            raise ServerError("Media upload failed")

        thumbnail_url = None
        if resource_type == "video":
            thumbnail_url = cloudinary.CloudinaryVideo(result["public_id"]).build_url(format="jpg")

        return StoredMedia(url=result["secure_url"], public_id=result["public_id"], thumbnail_url=thumbnail_url)


media_storage = MediaStorage()
