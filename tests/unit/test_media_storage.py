"""
Car image storage: validation, local disk and S3 backends
"""

import io

import boto3
import pytest
from botocore.stub import ANY, Stubber
from PIL import Image

from services.media_storage import (
    InvalidImageError,
    LocalMediaStorage,
    S3MediaStorage,
    validate_image,
)


def image_bytes(fmt):
    buffer = io.BytesIO()
    Image.new("RGB", (4, 4)).save(buffer, format=fmt)
    return buffer.getvalue()


class TestValidateImage:

    @pytest.mark.parametrize("filename,fmt,content_type", [
        ("car.png", "PNG", "image/png"),
        ("car.JPG", "JPEG", "image/jpeg"),
        ("car.jpeg", "JPEG", "image/jpeg"),
        ("car.gif", "GIF", "image/gif"),
    ])
    def test_accepts_supported_images(self, filename, fmt, content_type):
        validate_image(image_bytes(fmt), filename, content_type)

    def test_rejects_other_extensions(self):
        with pytest.raises(InvalidImageError, match="Only images"):
            validate_image(image_bytes("PNG"), "car.bmp", "image/bmp")

    def test_rejects_non_image_content_type(self):
        with pytest.raises(InvalidImageError):
            validate_image(image_bytes("PNG"), "car.png", "application/pdf")

    def test_rejects_oversized_upload(self):
        with pytest.raises(InvalidImageError, match="limit"):
            validate_image(image_bytes("PNG"), "car.png", "image/png", max_size=10)

    def test_rejects_bytes_that_are_not_an_image(self):
        with pytest.raises(InvalidImageError, match="not a valid image"):
            validate_image(b"definitely not a png", "car.png", "image/png")

    def test_rejects_empty_file(self):
        with pytest.raises(InvalidImageError):
            validate_image(b"", "car.png", "image/png")


class TestLocalMediaStorage:

    async def test_store_and_delete(self, tmp_path):
        storage = LocalMediaStorage(str(tmp_path))

        url = await storage.store(b"abc", "photo.PNG")

        assert url.startswith("/uploads/") and url.endswith(".png")
        stored = tmp_path / url.rsplit("/", 1)[-1]
        assert stored.read_bytes() == b"abc"

        assert await storage.delete(url) is True
        assert not stored.exists()

    async def test_delete_is_best_effort(self, tmp_path):
        storage = LocalMediaStorage(str(tmp_path))

        assert await storage.delete(None) is False
        assert await storage.delete("/uploads/missing.png") is False
        assert await storage.delete("https://elsewhere.example/car.png") is False
        assert await storage.delete("/uploads/../secret.txt") is False


class TestS3MediaStorage:

    @pytest.fixture
    def s3(self):
        client = boto3.client(
            "s3",
            region_name="eu-west-3",
            aws_access_key_id="testing",
            aws_secret_access_key="testing",
        )
        with Stubber(client) as stubber:
            yield client, stubber
            stubber.assert_no_pending_responses()

    async def test_store_uploads_under_prefix(self, s3):
        client, stubber = s3
        stubber.add_response(
            "put_object",
            {"ETag": '"etag"'},
            {"Bucket": "rental-media", "Key": ANY, "Body": b"img", "ContentType": "image/jpeg"},
        )
        storage = S3MediaStorage(client, "rental-media", "eu-west-3", prefix="cars")

        url = await storage.store(b"img", "front.jpg", "image/jpeg")

        assert url.startswith("https://rental-media.s3.eu-west-3.amazonaws.com/cars/")
        assert url.endswith(".jpg")

    async def test_delete_own_url(self, s3):
        client, stubber = s3
        stubber.add_response("delete_object", {}, {"Bucket": "rental-media", "Key": "cars/abc.png"})
        storage = S3MediaStorage(client, "rental-media", "eu-west-3")

        assert await storage.delete("https://rental-media.s3.eu-west-3.amazonaws.com/cars/abc.png") is True

    async def test_delete_failure_is_logged_not_raised(self, s3):
        client, stubber = s3
        stubber.add_client_error("delete_object", service_error_code="AccessDenied", http_status_code=403)
        storage = S3MediaStorage(client, "rental-media", "eu-west-3")

        assert await storage.delete("https://rental-media.s3.eu-west-3.amazonaws.com/cars/abc.png") is False

    async def test_foreign_urls_are_ignored(self, s3):
        client, _ = s3
        storage = S3MediaStorage(client, "rental-media", "eu-west-3")

        assert await storage.delete("https://res.cloudinary.com/demo/cars/abc.png") is False
        assert await storage.delete("/uploads/abc.png") is False
