"""S3 bucket for listing images, avatars and verification documents."""
import logging

import boto3
from botocore.exceptions import ClientError
from uniagora.config import settings

logger = logging.getLogger(__name__)

# Uploaded keys are timestamped and never overwritten
CACHE_CONTROL = "max-age=3600"


class S3Storage:
    def __init__(self, s3_client=None):
        if not settings.s3_enabled:
            raise ValueError("AWS S3 credentials and bucket name must be configured")

        self.s3_client = s3_client or boto3.client(
            's3',
            aws_access_key_id=settings.aws_access_key_id,
            aws_secret_access_key=settings.aws_secret_access_key,
            region_name=settings.aws_region
        )
        self.bucket_name = settings.s3_bucket_name
        self.region = settings.aws_region

    def public_url(self, key: str) -> str:
        return f"https://{self.bucket_name}.s3.{self.region}.amazonaws.com/{key}"

    def upload_file(self, file_content: bytes, key: str, content_type: str = "application/octet-stream") -> str:
        """Put the object and return the URL stored on the profile or listing row"""
        try:
            self.s3_client.put_object(
                Bucket=self.bucket_name,
                Key=key,
                Body=file_content,
                ContentType=content_type,
                CacheControl=CACHE_CONTROL,
            )
        except ClientError as e:
            logger.error(f"S3 upload of {key} to {self.bucket_name} failed: {str(e)}")
            raise
        return self.public_url(key)
