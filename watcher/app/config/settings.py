"""Settings for the MongoDB watcher."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    watcher_name: str = Field("mongodb", validation_alias="WATCHER_NAME")

    mongodb_connection_string: str = Field(..., validation_alias="MONGODB_CONNECTION_STRING")
    mongodb_database: str = Field(..., validation_alias="MONGODB_DATABASE")
    mongodb_collection: str = Field("", validation_alias="MONGODB_COLLECTION")
    # Extended-JSON filter document. Empty means connectivity-only check.
    mongodb_query: str = Field("", validation_alias="MONGODB_QUERY")
    mongodb_timeout_seconds: float = Field(5.0, validation_alias="MONGODB_TIMEOUT_SECONDS")
