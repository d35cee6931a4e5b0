# docsite/core/config.py
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

# License types whose content may be shown on the site.
DEFAULT_REDISTRIBUTABLE_LICENSES = [
    "0BSD",
    "AFL-3.0",
    "Apache-2.0",
    "Artistic-2.0",
    "BSD-0-Clause",
    "BSD-2-Clause",
    "BSD-2-Clause-FreeBSD",
    "BSD-3-Clause",
    "BSL-1.0",
    "CC0-1.0",
    "EPL-2.0",
    "GPL-2.0",
    "GPL-3.0",
    "ISC",
    "LGPL-2.1",
    "LGPL-3.0",
    "MIT",
    "MPL-2.0",
    "Unlicense",
    "Zlib",
]


class Settings(BaseSettings):
    # General
    ENV: str = "dev"
    APP_NAME: str = "Package Documentation"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = ""  # empty disables the file sink

    # Data
    DATA_FILE: str = ""  # YAML/JSON seed for the in-memory data source
    EXCLUDED_PATHS: List[str] = []

    # License policy
    REDISTRIBUTABLE_LICENSES: List[str] = DEFAULT_REDISTRIBUTABLE_LICENSES

    # Pages
    IMPORTED_BY_LIMIT: int = 100
    CGO_ARTICLE_URL: str = "https://golang.org/doc/articles/c_go_cgo.html"
    STDLIB_REPO_URL: str = "https://go.googlesource.com/go"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

_settings: Settings | None = None

def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
