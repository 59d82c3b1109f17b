"""
Raw upload storage: local folder or AWS S3.
Locations are plain paths for local storage and s3://bucket/key URLs for S3.
"""
import logging
import os
import shutil
import tempfile
import time

import boto3
from botocore.exceptions import ClientError
from flask import current_app
from werkzeug.utils import secure_filename

from config.config import aws_config

logger = logging.getLogger(__name__)


def get_s3_client():
    """Get boto3 S3 client."""
    return boto3.client(
        "s3",
        aws_access_key_id=aws_config.AWS_ACCESS_KEY_ID,
        aws_secret_access_key=aws_config.AWS_SECRET_ACCESS_KEY,
        region_name=aws_config.AWS_REGION,
    )


def is_s3_url(location: str) -> bool:
    return bool(location) and location.startswith("s3://")


def _split_s3_url(s3_url: str) -> tuple[str, str]:
    parts = s3_url.replace("s3://", "", 1).split("/", 1)
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise ValueError(f"Malformed S3 URL: {s3_url!r}")
    return parts[0], parts[1]


def _stored_name(file_name: str) -> str:
    """Timestamp-prefixed, filesystem-safe name so repeated uploads never collide."""
    return f"{int(time.time() * 1000)}-{secure_filename(file_name) or 'upload.las'}"


def save_upload(file_obj, file_name: str) -> str:
    """
    Persist the raw upload and return its location.
    Copies in chunks; the file is never read into memory as a whole.
    """
    file_obj.seek(0)
    name = _stored_name(file_name)
    if current_app.config.get("STORAGE_BACKEND", "local") == "s3":
        s3 = get_s3_client()
        key = f"uploads/{name}"
        s3.upload_fileobj(file_obj, aws_config.S3_BUCKET_NAME, key)
        location = f"s3://{aws_config.S3_BUCKET_NAME}/{key}"
    else:
        folder = current_app.config["UPLOAD_FOLDER"]
        os.makedirs(folder, exist_ok=True)
        location = os.path.join(folder, name)
        with open(location, "wb") as out:
            shutil.copyfileobj(file_obj, out)
    logger.debug("Stored upload %r at %s", file_name, location)
    return location


def open_stored(location: str):
    """
    Open a stored upload for reading as a binary, line-iterable stream.
    S3 objects are spooled to a temporary file first. Raises OSError or ClientError.
    """
    if is_s3_url(location):
        bucket, key = _split_s3_url(location)
        tmp = tempfile.TemporaryFile()
        try:
            get_s3_client().download_fileobj(bucket, key, tmp)
        except ClientError:
            tmp.close()
            raise
        tmp.seek(0)
        return tmp
    return open(location, "rb")


def get_presigned_url(s3_url: str, expiration=3600) -> str:
    """Generate presigned URL for S3 object."""
    bucket, key = _split_s3_url(s3_url)
    return get_s3_client().generate_presigned_url(
        "get_object",
        Params={"Bucket": bucket, "Key": key},
        ExpiresIn=expiration,
    )


def delete_stored(location: str) -> bool:
    """
    Delete a stored upload.
    Returns True if deleted (or already absent), False on error.
    """
    if not location:
        return False
    if is_s3_url(location):
        try:
            bucket, key = _split_s3_url(location)
            get_s3_client().delete_object(Bucket=bucket, Key=key)
            return True
        except (ClientError, ValueError):
            logger.warning("Could not delete %s", location, exc_info=True)
            return False
    try:
        os.remove(location)
    except FileNotFoundError:
        return True
    except OSError:
        logger.warning("Could not delete %s", location, exc_info=True)
        return False
    return True
