from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    # 1️⃣ Server
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    SITE_NAME: str = "Case Closed"
    LOG_LEVEL: str = "INFO"

    # 2️⃣ Contact routing
    CONTACT_TO_EMAIL: Optional[str] = None
    # "Display Name <addr>" or a bare address; falls back to SMTP_USER
    CONTACT_FROM_EMAIL: Optional[str] = None

    # 3️⃣ SMTP relay
    SMTP_HOST: Optional[str] = None
    SMTP_PORT: int = 465
    SMTP_SECURE: bool = True
    SMTP_USER: Optional[str] = None
    SMTP_PASS: Optional[str] = None
    SMTP_TIMEOUT: int = 60
    MAIL_SUPPRESS_SEND: bool = False

    # 4️⃣ CORS
    ALLOWED_ORIGIN: str = "http://localhost:5500,http://127.0.0.1:5500"
    CORS_ORIGIN_REGEX: Optional[str] = r"https?://.*\.netlify\.app"

    # 5️⃣ Abuse limits
    RATE_LIMIT_MAX: int = 20
    RATE_LIMIT_WINDOW_MINUTES: int = 10
    RATE_LIMIT_STORAGE_URI: str = "memory://"
    MAX_BODY_BYTES: int = 50 * 1024

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @property
    def allowed_origins(self) -> List[str]:
        return [origin.strip() for origin in self.ALLOWED_ORIGIN.split(",") if origin.strip()]

    @property
    def mail_sender(self) -> Optional[str]:
        return self.CONTACT_FROM_EMAIL or self.SMTP_USER


settings = Settings()
