"""
Car image storage - S3 bucket or local disk
"""

import asyncio
import io
import logging
import uuid
from pathlib import Path
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from PIL import Image, UnidentifiedImageError

from config import settings
from models.enums import MediaBackend

logger = logging.getLogger(__name__)

SUPPORTED_IMAGE_TYPES = ['jpg', 'jpeg', 'png', 'gif']


class InvalidImageError(ValueError):
    """Upload is not an accepted image"""


def get_file_type(filename: str) -> str:
    """Get file type from filename extension"""
    return Path(filename or "").suffix.lower().lstrip('.')


def validate_image(data: bytes, filename: str, content_type: Optional[str], max_size: int = None) -> None:
    """
    Check extension, content type, size and that Pillow can decode the image.

    Raises InvalidImageError describing the first failed check.
    """
    max_size = max_size or settings.MAX_IMAGE_SIZE
    file_type = get_file_type(filename)
    if file_type not in SUPPORTED_IMAGE_TYPES:
        raise InvalidImageError(f"Only images are allowed ({', '.join(SUPPORTED_IMAGE_TYPES)})")
    if content_type and not content_type.startswith("image/"):
        raise InvalidImageError(f"Unsupported content type: {content_type}")
    if not data:
        raise InvalidImageError("Image file is empty")
    if len(data) > max_size:
        raise InvalidImageError(f"Image exceeds the {max_size // (1024 * 1024)}MB limit")
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.verify()
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise InvalidImageError(f"File is not a valid image: {e}")


class MediaStorage:
    """Stores image bytes and hands back a public URL"""

    def _new_name(self, filename: str) -> str:
        suffix = Path(filename or "").suffix.lower()
        return f"{uuid.uuid4().hex}{suffix}"

    async def store(self, data: bytes, filename: str, content_type: str = "image/png") -> str:
        raise NotImplementedError

    async def delete(self, url: Optional[str]) -> bool:
        """Best-effort removal; returns False instead of raising"""
        raise NotImplementedError


class S3MediaStorage(MediaStorage):
    """Images in an S3 bucket under a key prefix"""

    def __init__(self, s3_client, bucket: str, region: str, prefix: str = "cars"):
        self.s3_client = s3_client
        self.bucket = bucket
        self.region = region
        self.prefix = prefix.strip("/")

    @property
    def base_url(self) -> str:
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/"

    async def store(self, data: bytes, filename: str, content_type: str = "image/png") -> str:
        """Upload file data to S3 and return the S3 location"""
        s3_key = f"{self.prefix}/{self._new_name(filename)}"
        try:
            await asyncio.to_thread(
                self.s3_client.put_object,
                Bucket=self.bucket,
                Key=s3_key,
                Body=data,
                ContentType=content_type,
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Failed to upload to S3: {e}")
            raise
        s3_location = f"{self.base_url}{s3_key}"
        logger.info(f"Uploaded image to {s3_location}")
        return s3_location

    async def delete(self, url: Optional[str]) -> bool:
        if not url or not url.startswith(self.base_url):
            return False
        s3_key = url[len(self.base_url):]
        try:
            await asyncio.to_thread(self.s3_client.delete_object, Bucket=self.bucket, Key=s3_key)
        except (BotoCoreError, ClientError) as e:
            logger.warning(f"Failed to delete old image {s3_key}: {e}")
            return False
        logger.info(f"Deleted image {s3_key}")
        return True


class LocalMediaStorage(MediaStorage):
    """Images on local disk, served by the app under /uploads"""

    def __init__(self, upload_dir: str, url_prefix: str = "/uploads"):
        self.upload_dir = Path(upload_dir)
        self.url_prefix = url_prefix.rstrip("/")
        self.upload_dir.mkdir(parents=True, exist_ok=True)

    async def store(self, data: bytes, filename: str, content_type: str = "image/png") -> str:
        name = self._new_name(filename)
        await asyncio.to_thread((self.upload_dir / name).write_bytes, data)
        logger.info(f"Saved image {name} to {self.upload_dir}")
        return f"{self.url_prefix}/{name}"

    async def delete(self, url: Optional[str]) -> bool:
        if not url or not url.startswith(self.url_prefix + "/"):
            return False
        name = url[len(self.url_prefix) + 1:]
        path = self.upload_dir / name
        # Only plain file names inside upload_dir
        if "/" in name or "\\" in name or name in ("", ".", ".."):
            return False
        try:
            path.unlink()
        except OSError as e:
            logger.warning(f"Failed to delete image {path}: {e}")
            return False
        logger.info(f"Deleted image {path}")
        return True


def create_media_storage() -> MediaStorage:
    """Build the storage selected by MEDIA_BACKEND"""
    if settings.MEDIA_BACKEND == MediaBackend.S3.value:
        s3_client = boto3.client("s3", region_name=settings.AWS_REGION)
        return S3MediaStorage(s3_client, settings.S3_BUCKET_NAME, settings.AWS_REGION, settings.S3_KEY_PREFIX)
    return LocalMediaStorage(settings.UPLOAD_DIR)
