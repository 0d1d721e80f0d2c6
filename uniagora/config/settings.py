from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_service_role_key: Optional[str] = None  # Required for admin auth operations (password update)
    storage_bucket: str = "uniagora"

    # AWS S3 (optional; Supabase Storage is used when these are unset)
    aws_access_key_id: Optional[str] = None
    aws_secret_access_key: Optional[str] = None
    aws_region: str = "us-east-1"
    s3_bucket_name: Optional[str] = None

    # Marketplace
    admin_emails: str = ""  # comma separated
    admin_metadata_type: str = "admin"  # app_metadata.type that grants the admin console
    phone_country_prefix: str = "+234"
    max_image_bytes: int = 2 * 1024 * 1024
    max_document_bytes: int = 5 * 1024 * 1024
    message_poll_interval: float = 3.0
    message_poll_overlap: float = 10.0  # seconds re-fetched behind the cursor
    site_url: str = "http://localhost:3000"

    # App
    app_name: str = "uniagora"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000"
    rate_limit: str = "100/minute"  # slowapi format, e.g. "100/minute"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def s3_enabled(self) -> bool:
        return all([self.aws_access_key_id, self.aws_secret_access_key, self.s3_bucket_name])

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    def get_admin_emails_list(self) -> List[str]:
        return [e.strip().lower() for e in self.admin_emails.split(",") if e.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",
        extra="ignore"
    )


settings = Settings()
