"""Supabase Storage bucket for listing images, avatars and verification documents."""
from supabase import Client
from uniagora.config import settings


class SupabaseStorage:
    def __init__(self, supabase: Client, bucket_name: str = None):
        self.supabase = supabase
        self.bucket_name = bucket_name or settings.storage_bucket

    def upload_file(self, file_content: bytes, key: str, content_type: str = "application/octet-stream") -> str:
        """Upload to the bucket and return the public URL."""
        bucket = self.supabase.storage.from_(self.bucket_name)
        bucket.upload(key, file_content, {"content-type": content_type})
        return bucket.get_public_url(key)
