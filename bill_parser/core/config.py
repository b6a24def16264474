
from pydantic import Field
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    app_name: str = Field("smart-bill-parser", alias="APP_NAME")
    app_env: str = Field("dev", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    # External parse collaborator (multipart image in, {items, total?} out)
    parse_bill_url: str = Field("http://127.0.0.1:3000/api/parse-bill", alias="PARSE_BILL_URL")
    parse_timeout_seconds: float = Field(30.0, alias="PARSE_TIMEOUT_SECONDS")

    # Handoff store between the capture and edit stages
    handoff_backend: str = Field("memory", alias="HANDOFF_BACKEND")  # "memory" or "sqlite"
    handoff_db_path: str = Field("handoff.db", alias="HANDOFF_DB_PATH")
    handoff_key: str = Field("billData", alias="HANDOFF_KEY")

    # CORS allowed origins (comma-separated list)
    cors_origins: str = Field("http://localhost:3000,http://127.0.0.1:3000", alias="CORS_ORIGINS")

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

settings = Settings()
