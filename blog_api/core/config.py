from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str
    jwt_secret: str
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 30
    bcrypt_rounds: int = 12

    # Загрузка изображений
    upload_dir: str = "uploads"
    max_upload_size: int = 5 * 1024 * 1024

    cors_origins: List[str] = ["*"]
    log_level: str = "INFO"
    sql_echo: bool = False

    model_config = {"env_file": ".env", "extra": "ignore"}

settings = Settings()
