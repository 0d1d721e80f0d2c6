import unittest
from unittest.mock import MagicMock, patch

from uniagora.config import settings
from uniagora.modules.storage.s3_storage import S3Storage
from uniagora.modules.storage.service import StorageService
from uniagora.modules.storage.supabase_storage import SupabaseStorage

from tests.fakes import FakeSupabase

AWS = {
    "aws_access_key_id": "AKIATEST",
    "aws_secret_access_key": "secret",
    "s3_bucket_name": "uniagora-uploads",
    "aws_region": "eu-west-1",
}


def patch_settings(**values):
    patchers = [patch.object(settings, k, v) for k, v in values.items()]
    for p in patchers:
        p.start()
    return patchers


class StorageBackendTests(unittest.TestCase):
    def tearDown(self):
        patch.stopall()

    def test_supabase_backend_without_aws_credentials(self):
        patch_settings(aws_access_key_id=None, aws_secret_access_key=None, s3_bucket_name=None)
        service = StorageService(FakeSupabase())
        self.assertIsInstance(service.backend, SupabaseStorage)

    def test_s3_backend_when_configured(self):
        patch_settings(**AWS)
        with patch("uniagora.modules.storage.s3_storage.boto3.client") as client_factory:
            service = StorageService(FakeSupabase())
        self.assertIsInstance(service.backend, S3Storage)
        client_factory.assert_called_once()

    def test_s3_upload_returns_public_url(self):
        patch_settings(**AWS)
        client = MagicMock()
        storage = S3Storage(s3_client=client)
        url = storage.upload_file(b"png", "profiles/1-a.png", content_type="image/png")
        self.assertEqual(url, "https://uniagora-uploads.s3.eu-west-1.amazonaws.com/profiles/1-a.png")
        kwargs = client.put_object.call_args.kwargs
        self.assertEqual(kwargs["Bucket"], "uniagora-uploads")
        self.assertEqual(kwargs["ContentType"], "image/png")

    def test_s3_requires_credentials(self):
        patch_settings(aws_access_key_id=None)
        with self.assertRaises(ValueError):
            S3Storage(s3_client=MagicMock())

    def test_supabase_upload_uses_configured_bucket(self):
        db = FakeSupabase()
        url = SupabaseStorage(db, bucket_name="campus").upload_file(b"%PDF", "verifications/u/1-id.pdf", "application/pdf")
        self.assertTrue(url.endswith("/campus/verifications/u/1-id.pdf"))
        self.assertEqual(db.storage.objects["verifications/u/1-id.pdf"], (b"%PDF", "application/pdf"))


if __name__ == "__main__":
    unittest.main()
