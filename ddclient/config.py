from pydantic_settings import BaseSettings

from ddclient.client import DEFAULT_BASE_URL


class Settings(BaseSettings):
    api_key: str = ""
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 30.0
    log_format: str = "text"
    log_level: str = "INFO"

    model_config = {
        "env_prefix": "DIRECTDECISIONS_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


settings = Settings()
