# config/settings.py
import os
import sys
from dotenv import load_dotenv
from pydantic import ValidationError, Field
from pydantic_settings import BaseSettings
from util.enums import Environment


if os.getenv("APP_ENV", Environment.DEV) == Environment.DEV:
    load_dotenv()


class Settings(BaseSettings):
    # App
    APP_ENV: str = Field(default=Environment.DEV.value, validation_alias="APP_ENV")
    SERVER_NAME: str = "mobicycle-ou"
    SERVER_VERSION: str = "1.0.0"

    # Redis-backed namespaces
    REDIS_URL: str = Field(
        default="redis://localhost:6379/0", validation_alias="REDIS_URL"
    )
    KV_KEY_ROOT: str = Field(default="mobicycle", validation_alias="KV_KEY_ROOT")

    # CORS & Limits
    ALLOWED_ORIGIN: str = Field(default="*", validation_alias="ALLOWED_ORIGIN")
    RATE_LIMIT_TIMES: int = Field(default=120, validation_alias="RATE_LIMIT_TIMES")
    RATE_LIMIT_SECONDS: int = Field(default=60, validation_alias="RATE_LIMIT_SECONDS")

    # Listing / bulk knobs
    LIST_DEFAULT_LIMIT: int = 100
    LIST_MAX_LIMIT: int = 1000
    LIST_ALL_PAGE_SIZE: int = 1000
    LIST_ALL_MAX_PAGES: int = Field(
        default=10_000, validation_alias="LIST_ALL_MAX_PAGES"
    )
    BULK_GET_MAX: int = 100

    # Email pipeline
    EMAIL_KEY_PREFIX: str = "email:"

    # Logging knobs
    LOGGER_NAME: str = "mobicycle-kv"
    LOG_LEVEL: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    LOG_TO_FILE: bool = Field(default=False, validation_alias="LOG_TO_FILE")
    LOG_DIR: str = Field(default="logs", validation_alias="LOG_DIR")
    LOG_FILE_NAME: str = Field(default="app.log", validation_alias="LOG_FILE_NAME")
    LOG_MAX_BYTES: int = Field(
        default=50 * 1024 * 1024, validation_alias="LOG_MAX_BYTES"
    )
    LOG_BACKUP_COUNT: int = Field(default=5, validation_alias="LOG_BACKUP_COUNT")
    LOG_QUIET_LOGGERS: str = Field(
        default="redis,mcp,httpx", validation_alias="LOG_QUIET_LOGGERS"
    )


try:
    settings = Settings()
except ValidationError as e:
    print("❌ Missing/invalid environment variables:", file=sys.stderr)
    for err in e.errors():
        loc = ".".join(str(x) for x in err.get("loc", []))
        msg = err.get("msg", "")
        print(f" - {loc}: {msg}", file=sys.stderr)
    sys.exit(1)
except Exception as e:
    print(f"❌ Settings initialization failed: {e}", file=sys.stderr)
    sys.exit(1)
