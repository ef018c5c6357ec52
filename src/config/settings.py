"""
Configuration settings for the Car Rental Backend
"""

import os
import logging

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Environment configuration
PORT = int(os.getenv("PORT", 5000))

# Write pool targets the primary instance, read pool the replica
DATABASE_URL_WRITE = os.getenv("DATABASE_URL_WRITE") or os.getenv("DATABASE_URL")
DATABASE_URL_READ = os.getenv("DATABASE_URL_READ") or DATABASE_URL_WRITE

DB_POOL_MIN_SIZE = int(os.getenv("DB_POOL_MIN_SIZE", 2))
DB_POOL_MAX_SIZE = int(os.getenv("DB_POOL_MAX_SIZE", 10))
DB_COMMAND_TIMEOUT = float(os.getenv("DB_COMMAND_TIMEOUT", 60))

# Media storage configuration
S3_BUCKET_NAME = os.getenv("S3_BUCKET_NAME")
AWS_REGION = os.getenv("AWS_REGION", "us-east-1")
S3_KEY_PREFIX = os.getenv("S3_KEY_PREFIX", "cars")
MEDIA_BACKEND = os.getenv("MEDIA_BACKEND", "s3" if S3_BUCKET_NAME else "local")
UPLOAD_DIR = os.getenv("UPLOAD_DIR", "uploads")
MAX_IMAGE_SIZE = int(os.getenv("MAX_IMAGE_SIZE", 10 * 1024 * 1024))  # 10MB

logger.info(f"Media backend: {MEDIA_BACKEND}")

if DATABASE_URL_WRITE and DATABASE_URL_READ == DATABASE_URL_WRITE:
    logger.info("DATABASE_URL_READ not set - reads will use the primary instance")
if MEDIA_BACKEND == "s3" and not S3_BUCKET_NAME:
    logger.warning("MEDIA_BACKEND is s3 but S3_BUCKET_NAME is not set")

# CORS settings
ALLOWED_ORIGINS = [
    origin.strip() for origin in os.getenv("ALLOWED_ORIGINS", "*").split(",") if origin.strip()
]
