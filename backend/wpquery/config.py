"""
Connection and presentation settings.

Settings are read once at startup. The table prefix is fixed for the lifetime
of a QueryService; there is no per-call override.
"""
import os
import re
from typing import Any, Optional, Union

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from sqlalchemy.engine import URL

from wpquery.errors import ConfigurationError

DEFAULT_PREFIX = "wp_"
MYSQL_DRIVER = "mysql+aiomysql"

_PREFIX_RE = re.compile(r"^[A-Za-z0-9_]*$")
_TRUTHY = ("true", "1", "yes")


class WordPressSettings(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    host: Optional[str] = None
    port: Optional[int] = None
    database_url: Optional[str] = None  # Full SQLAlchemy URL, wins over the fields above
    wp_prefix: str = DEFAULT_PREFIX
    amazon_s3: bool = Field(default=False, alias="amazonS3")
    upload_directory: str = Field(default="", alias="uploadDirectory")
    sql_echo: bool = False

    @field_validator("wp_prefix")
    @classmethod
    def _check_prefix(cls, value: str) -> str:
        # Prefix is substituted into table identifiers
        if not _PREFIX_RE.match(value):
            raise ValueError("wp_prefix may only contain letters, digits and underscores")
        return value

    @classmethod
    def from_env(cls) -> "WordPressSettings":
        """Build settings from the environment (and a .env file if present)"""
        load_dotenv()
        return load_settings(
            name=os.getenv("WP_DB_NAME"),
            username=os.getenv("WP_DB_USER"),
            password=os.getenv("WP_DB_PASSWORD"),
            host=os.getenv("WP_DB_HOST"),
            port=os.getenv("WP_DB_PORT") or None,
            database_url=os.getenv("DATABASE_URL"),
            wp_prefix=os.getenv("WP_PREFIX", DEFAULT_PREFIX),
            amazonS3=os.getenv("WP_AMAZON_S3", "false").lower() in _TRUTHY,
            uploadDirectory=os.getenv("WP_UPLOAD_DIRECTORY", ""),
            sql_echo=os.getenv("SQL_ECHO", "false").lower() in _TRUTHY,
        )

    def sqlalchemy_url(self) -> Union[str, URL]:
        """
        URL for the async engine.

        Raises ConfigurationError when neither database_url nor the
        name/username/host triple is configured.
        """
        if self.database_url:
            return self.database_url
        missing = [field for field in ("name", "username", "host") if not getattr(self, field)]
        if missing:
            raise ConfigurationError(f"Missing database settings: {', '.join(missing)}")
        return URL.create(
            MYSQL_DRIVER,
            username=self.username,
            password=self.password,
            host=self.host,
            port=self.port,
            database=self.name,
        )


def load_settings(**options: Any) -> WordPressSettings:
    """Validate raw options; pydantic errors surface as ConfigurationError."""
    try:
        return WordPressSettings(**options)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid settings: {exc}") from exc
