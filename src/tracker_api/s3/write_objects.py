"""Functions for writing objects to an S3 bucket--the "C" and "U" in CRUD."""

from typing import TYPE_CHECKING, Optional
from urllib.parse import quote

import boto3

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client


def upload_s3_object(
    bucket_name: str,
    object_key: str,
    file_content: bytes,
    content_type: Optional[str] = None,
    s3_client: Optional["S3Client"] = None,
) -> None:
    """
    Upload a file to an S3 bucket.

    :param bucket_name: The name of the S3 bucket.
    :param object_key: path to the object in the S3 bucket.
    :param file_content: The content of the file to upload.
    :param content_type: The MIME type of the file, e.g. "image/jpeg" for a photo.
    :param s3_client: An optional boto3 S3 client. If not provided, one will be created.
    """
    content_type = content_type or "application/octet-stream"
    s3_client = s3_client or boto3.client("s3")
    s3_client.put_object(
        Bucket=bucket_name,
        Key=object_key,
        Body=file_content,
        ContentType=content_type,
    )


def make_s3_object_public(
    bucket_name: str,
    object_key: str,
    s3_client: Optional["S3Client"] = None,
) -> None:
    """
    Let anyone holding the object's link read it.

    :param bucket_name: The name of the S3 bucket.
    :param object_key: path to the object in the S3 bucket.
    :param s3_client: An optional boto3 S3 client. If not provided, one will be created.
    """
    s3_client = s3_client or boto3.client("s3")
    s3_client.put_object_acl(Bucket=bucket_name, Key=object_key, ACL="public-read")


def build_s3_object_url(
    bucket_name: str,
    object_key: str,
    region: str,
    endpoint_url: Optional[str] = None,
) -> str:
    """Public URL of an object, path-style when a custom endpoint is configured."""
    key = quote(object_key)
    if endpoint_url:
        return f"{endpoint_url.rstrip('/')}/{bucket_name}/{key}"
    return f"https://{bucket_name}.s3.{region}.amazonaws.com/{key}"
