"""Shared base class for settings modules."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class FeatureSettings(BaseSettings):
    """Base class for communicator and delivery settings.

    Fields declare their environment variable with ``alias=`` and can also be
    passed by field name, which is how tests build settings without an
    environment.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
        populate_by_name=True,
    )
