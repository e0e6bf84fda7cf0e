"""
Blob sinks for uploaded media.

A sink stores decoded bytes under a file name and MIME type, makes the object
viewable by anyone holding its link, and returns that link. Every upload gets
its own stored key, so an upload never replaces an earlier file with the same
name.
"""

import logging
import uuid
from pathlib import Path
from typing import Optional
from urllib.parse import quote

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from pydantic import BaseModel

from tracker_api.config.settings import Settings
from tracker_api.errors import StorageError
from tracker_api.s3.write_objects import (
    build_s3_object_url,
    make_s3_object_public,
    upload_s3_object,
)

logger = logging.getLogger(__name__)


class StoredBlob(BaseModel):
    """Where an upload ended up."""
    name: str
    key: str
    url: str
    mime_type: str


def unique_blob_key(name: str) -> str:
    """`<random hex>-<base name>`; path components sent by the client are dropped."""
    return f"{uuid.uuid4().hex}-{Path(name).name}"


class BaseBlobSink:
    """Base class for blob sinks (to be extended by specific implementations)"""

    def store(self, name: str, content: bytes, mime_type: str) -> StoredBlob:
        raise NotImplementedError

    def check(self) -> None:
        """Raise if the sink cannot accept uploads."""
        raise NotImplementedError


class LocalBlobSink(BaseBlobSink):
    """Stores media on the local file system, served back by `GET /media/{key}`"""

    def __init__(self, settings: Settings):
        self.folder = Path(settings.storage_dir) / settings.media_folder
        self.base_url = settings.public_base_url.rstrip("/")
        self.folder.mkdir(parents=True, exist_ok=True)
        logger.info(f"LocalBlobSink initialized at: {self.folder}")

    def path_for(self, key: str) -> Path:
        # Keep lookups inside the media folder whatever the client sends.
        return self.folder / Path(key).name

    def store(self, name: str, content: bytes, mime_type: str) -> StoredBlob:
        key = unique_blob_key(name)
        path = self.path_for(key)
        try:
            path.write_bytes(content)
        except OSError as e:
            logger.error(f"Error writing {path}: {e}")
            raise StorageError(f"Failed to store file '{name}': {e}") from e
        # Local files are readable by anyone who can reach the media route.
        url = f"{self.base_url}/media/{quote(key)}"
        logger.info(f"Stored {len(content)} bytes as {path}")
        return StoredBlob(name=Path(name).name, key=key, url=url, mime_type=mime_type)

    def check(self) -> None:
        if not self.folder.is_dir():
            raise StorageError(f"Media folder missing: {self.folder}")


class S3BlobSink(BaseBlobSink):
    """Stores media in an S3 bucket under the media folder prefix"""

    def __init__(self, settings: Settings, s3_client=None):
        self.s3 = s3_client or boto3.client(
            "s3",
            endpoint_url=settings.aws_endpoint_url,
            aws_access_key_id=settings.aws_access_key_id,
            aws_secret_access_key=settings.aws_secret_access_key,
            region_name=settings.aws_region
        )
        self.bucket_name = settings.s3_bucket_name
        self.folder = settings.media_folder.strip("/")
        self.region = settings.aws_region
        self.endpoint_url = settings.aws_endpoint_url

        logger.info(f"S3BlobSink initialized")
        logger.info(f"  Endpoint: {settings.aws_endpoint_url}")
        logger.info(f"  Bucket: {self.bucket_name}")
        logger.info(f"  Folder: {self.folder}")

    def object_key(self, key: str) -> str:
        return f"{self.folder}/{key}" if self.folder else key

    def store(self, name: str, content: bytes, mime_type: str) -> StoredBlob:
        key = unique_blob_key(name)
        object_key = self.object_key(key)
        try:
            upload_s3_object(
                bucket_name=self.bucket_name,
                object_key=object_key,
                file_content=content,
                content_type=mime_type,
                s3_client=self.s3,
            )
            make_s3_object_public(self.bucket_name, object_key, s3_client=self.s3)
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Error uploading to S3: {str(e)}")
            raise StorageError(f"Failed to store file '{name}': {e}") from e

        url = build_s3_object_url(self.bucket_name, object_key, self.region, self.endpoint_url)
        logger.info(f"Uploaded {len(content)} bytes to s3://{self.bucket_name}/{object_key}")
        return StoredBlob(name=Path(name).name, key=object_key, url=url, mime_type=mime_type)

    def check(self) -> None:
        try:
            self.s3.head_bucket(Bucket=self.bucket_name)
        except (BotoCoreError, ClientError) as e:
            raise StorageError(f"Bucket {self.bucket_name} unavailable: {e}") from e


class BlobSinkFactory:
    """Factory to initialize the correct blob sink based on deployment mode"""

    @staticmethod
    def get_blob_sink(settings: Settings, s3_client: Optional[object] = None) -> BaseBlobSink:
        logger.info(f"Creating blob sink for mode: {settings.deployment_mode}")
        if settings.uses_s3:
            return S3BlobSink(settings, s3_client=s3_client)
        return LocalBlobSink(settings)
