"""
Settings validation and URL construction.
"""

import pytest

from wpquery.config import WordPressSettings, load_settings
from wpquery.errors import ConfigurationError
from wpquery.services.thumbnail_resolver import thumbnail_base_path


def test_defaults():
    settings = load_settings()
    assert settings.wp_prefix == "wp_"
    assert settings.amazon_s3 is False
    assert settings.upload_directory == ""


def test_camel_case_options_accepted():
    settings = load_settings(amazonS3=True, uploadDirectory="https://bucket/")
    assert settings.amazon_s3 is True
    assert settings.upload_directory == "https://bucket/"


def test_mysql_url_from_parts():
    settings = load_settings(name="wordpress", username="wp", password="secret", host="db.local", port=3307)
    url = settings.sqlalchemy_url()
    assert url.drivername == "mysql+aiomysql"
    assert (url.username, url.password, url.host, url.port, url.database) == ("wp", "secret", "db.local", 3307, "wordpress")


def test_database_url_wins():
    settings = load_settings(name="ignored", database_url="sqlite+aiosqlite:///./wp.db")
    assert settings.sqlalchemy_url() == "sqlite+aiosqlite:///./wp.db"


def test_missing_connection_parameters():
    with pytest.raises(ConfigurationError, match="name, host"):
        load_settings(username="wp").sqlalchemy_url()


@pytest.mark.parametrize("prefix", ["wp_; DROP TABLE", "wp-", "wp prefix"])
def test_bad_prefix(prefix):
    with pytest.raises(ConfigurationError):
        load_settings(wp_prefix=prefix)


def test_malformed_option_type():
    with pytest.raises(ConfigurationError):
        load_settings(port="not-a-port")


def test_from_env(monkeypatch):
    monkeypatch.setenv("WP_DB_NAME", "site")
    monkeypatch.setenv("WP_DB_USER", "reader")
    monkeypatch.setenv("WP_DB_HOST", "mysql")
    monkeypatch.setenv("WP_DB_PORT", "3306")
    monkeypatch.setenv("WP_PREFIX", "site_")
    monkeypatch.setenv("WP_AMAZON_S3", "yes")
    monkeypatch.setenv("WP_UPLOAD_DIRECTORY", "https://bucket/")
    monkeypatch.delenv("DATABASE_URL", raising=False)

    settings = WordPressSettings.from_env()
    assert (settings.name, settings.username, settings.host, settings.port) == ("site", "reader", "mysql", 3306)
    assert settings.wp_prefix == "site_"
    assert settings.amazon_s3 is True
    assert settings.upload_directory == "https://bucket/"


def test_thumbnail_base_path_rules():
    assert thumbnail_base_path(load_settings(uploadDirectory="/srv/", amazonS3=False)) == "/srv/wp-content/uploads/"
    assert thumbnail_base_path(load_settings(uploadDirectory="s3://b/", amazonS3=True)) == "s3://b/"


def test_from_env_malformed_port(monkeypatch):
    monkeypatch.setenv("WP_DB_NAME", "site")
    monkeypatch.setenv("WP_DB_USER", "reader")
    monkeypatch.setenv("WP_DB_HOST", "mysql")
    monkeypatch.setenv("WP_DB_PORT", "33o6")

    with pytest.raises(ConfigurationError):
        WordPressSettings.from_env()
