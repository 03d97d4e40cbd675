from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""

    # Object storage
    storage_backend: str = "supabase"  # supabase | s3
    documents_bucket: str = "documents"
    documents_table: str = "documents"
    signed_url_ttl_seconds: int = 3600
    max_upload_files: int = 20

    # AWS S3 (will read from uppercase env vars automatically)
    aws_access_key_id: Optional[str] = None
    aws_secret_access_key: Optional[str] = None
    aws_region: str = "ap-south-1"
    s3_bucket_name: Optional[str] = None

    # Auth redirects
    site_url: str = "http://localhost:5173"
    auth_callback_path: str = "/auth/callback"
    login_path: str = "/login"
    oauth_providers: str = "google"

    # App
    app_name: str = "virasat-backend"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000,http://127.0.0.1:5173"
    rate_limit: str = "100/minute"  # slowapi format, e.g. "100/minute"
    rate_limit_enabled: bool = True
    auth_rate_limit: str = "10/minute"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def auth_redirect_url(self) -> str:
        return f"{self.site_url.rstrip('/')}{self.auth_callback_path}"

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    def get_oauth_providers_list(self) -> List[str]:
        return [p.strip().lower() for p in self.oauth_providers.split(",") if p.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix needed
        extra="ignore"
    )


settings = Settings()
