"""
Index creation options.
"""

from datetime import timedelta
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Model field -> create_index keyword understood by the server
_INDEX_OPTION_NAMES: dict[str, str] = {
    "unique": "unique",
    "text_index_version": "textIndexVersion",
    "sphere_index_version": "2dsphereIndexVersion",
    "sparse": "sparse",
    "name": "name",
    "min": "min",
    "max": "max",
    "language_override": "language_override",
    "expire_after": "expireAfterSeconds",
    "default_language": "default_language",
    "bucket_size": "bucketSize",
    "bits": "bits",
    "background": "background",
    "version": "v",
}


class IndexCreationOptions(BaseModel):
    """
    Options applied when creating an index.

    Unset options are left to the server defaults.

    Example:
        options = IndexCreationOptions(unique=True, name="email_unique")
        await repo.create_ascending_index(User, "email", options)
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    unique: bool | None = None
    text_index_version: int | None = Field(default=None, ge=1)
    sphere_index_version: int | None = Field(default=None, ge=1)
    sparse: bool | None = None
    name: str | None = None
    min: float | None = None
    max: float | None = None
    language_override: str | None = None
    expire_after: timedelta | None = None
    default_language: str | None = None
    bucket_size: float | None = None
    bits: int | None = Field(default=None, ge=1, le=32)
    background: bool | None = None
    version: int | None = Field(default=None, ge=0)

    def to_index_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for ``Collection.create_index``."""
        kwargs: dict[str, Any] = {}
        for field_name, value in self.model_dump(exclude_none=True).items():
            if field_name == "expire_after":
                value = int(value.total_seconds())
            kwargs[_INDEX_OPTION_NAMES[field_name]] = value
        return kwargs
