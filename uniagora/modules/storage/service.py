from fastapi import Depends, HTTPException, UploadFile
from supabase import Client
from uniagora.config import settings
from uniagora.database.supabase_client import get_service_supabase
from uniagora.core.validators import storage_file_name
from uniagora.modules.storage.s3_storage import S3Storage
from uniagora.modules.storage.supabase_storage import SupabaseStorage
import logging

logger = logging.getLogger(__name__)

SERVICES_PREFIX = "services"
PROFILES_PREFIX = "profiles"
VERIFICATIONS_PREFIX = "verifications"

DOCUMENT_CONTENT_TYPES = ("application/pdf", "image/jpeg", "image/png", "image/jpg")


def verification_prefix(user_id: str) -> str:
    return f"{VERIFICATIONS_PREFIX}/{user_id}"


class StorageService:
    def __init__(self, supabase: Client):
        # S3 when credentials are available, otherwise the Supabase bucket
        self.backend = None
        if settings.s3_enabled:
            try:
                self.backend = S3Storage()
                logger.info("S3 storage initialized successfully")
            except Exception as e:
                logger.warning(f"S3 storage initialization failed ({str(e)}), will use Supabase Storage")
        if self.backend is None:
            self.backend = SupabaseStorage(supabase)

    async def upload_image(self, file: UploadFile, prefix: str) -> str:
        """Upload an image (<= max_image_bytes) under prefix and return its public URL"""
        content_type = file.content_type or ""
        if not content_type.startswith("image/"):
            raise HTTPException(status_code=400, detail="Only image files are accepted")
        content = await file.read()
        if len(content) > settings.max_image_bytes:
            raise HTTPException(status_code=400, detail="Image size must be less than 2MB")
        return self._store(content, prefix, file.filename, content_type)

    async def upload_document(self, file: UploadFile, prefix: str) -> str:
        """Upload a verification document (PDF/JPEG/PNG, <= max_document_bytes)"""
        content_type = file.content_type or ""
        if content_type not in DOCUMENT_CONTENT_TYPES:
            raise HTTPException(status_code=400, detail="Only PDF, JPEG, or PNG files are accepted.")
        content = await file.read()
        if len(content) > settings.max_document_bytes:
            raise HTTPException(status_code=400, detail="File size must be less than 5MB.")
        return self._store(content, prefix, file.filename, content_type)

    def _store(self, content: bytes, prefix: str, filename: str, content_type: str) -> str:
        key = f"{prefix}/{storage_file_name(filename)}"
        try:
            url = self.backend.upload_file(content, key, content_type=content_type)
            logger.info(f"Uploaded {key} ({len(content)} bytes)")
            return url
        except Exception as e:
            logger.error(f"Upload of {key} failed: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to upload file: {str(e)}")


def get_storage_service(supabase: Client = Depends(get_service_supabase)) -> StorageService:
    return StorageService(supabase)
