"""
Settings

Runtime settings for wpmm, read from WPMM_* environment variables or a local .env file.
"""
from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Logging
    log_level: str = "INFO"
    log_dir: str = ""

    # Network
    user_agent: str = "wpmm"
    request_timeout: float = 30.0
    max_redirects: int = 10
    chunk_size: int = 64 * 1024
    version_check_url: str = "https://api.wordpress.org/core/version-check/1.7/"

    # Installation defaults
    default_install_folder: str = "wordpress"
    default_language: str = "en_US"
    package_file_name: str = "wp-package.json"

    class Config:
        env_prefix = "WPMM_"
        env_file = ".env"
        extra = "ignore"


@lru_cache()
def get_settings():
    return Settings()
