"""Settings for mongodb-helpers."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Literal

from pydantic import PositiveInt, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing_extensions import Self

from mongodb_helpers.errors import InvalidArgumentError
from mongodb_helpers.membership import DEFAULT_CHUNK_SIZE
from mongodb_helpers.pagination import DEFAULT_PAGE_SIZE

DEFAULT_ENV_PREFIX: str = "MONGODB_HELPERS_"

DatetimeConversion = Literal["datetime_ms", "datetime", "datetime_auto", "datetime_clamp"]


class HelperSettings(BaseSettings):
    """Defaults used by MongoDBConnector when calling the helpers.

    Values not passed explicitly are read from MONGODB_HELPERS_* environment variables, e.g.
    MONGODB_HELPERS_CHUNK_SIZE=10.

    * page_size: records per page for get_page. Default 10.
    * chunk_size: values per membership query. Most document databases cap an ``$in``-like filter, the conventional
      limit being 10.
    * max_concurrency: chunk queries allowed in flight at once. Default 1 (sequential).
    * datetime_conversion: passed to the MongoClient 'datetime_conversion' parameter (uppercased). See
      https://pymongo.readthedocs.io/en/stable/examples/datetimes.html#handling-out-of-range-datetimes. With
      'datetime_ms', dates are returned as DatetimeMS values, which convert_timestamps turns back into datetimes.
    """

    model_config = SettingsConfigDict(
        env_prefix=DEFAULT_ENV_PREFIX,
        env_ignore_empty=True,
        extra="forbid",
        frozen=True,
    )

    page_size: PositiveInt = DEFAULT_PAGE_SIZE
    chunk_size: PositiveInt = DEFAULT_CHUNK_SIZE
    max_concurrency: PositiveInt = 1
    datetime_conversion: DatetimeConversion = "datetime"

    def __init__(self, **values: Any) -> None:
        try:
            super().__init__(**values)
        except ValidationError as error:
            raise InvalidArgumentError(str(error)) from error

    @field_validator("datetime_conversion", mode="before")
    @classmethod
    def lowercase_datetime_conversion(cls, value: Any) -> Any:
        """Accept the uppercase pymongo spelling (DATETIME_MS...)."""
        return value.lower() if isinstance(value, str) else value

    @classmethod
    def from_dict(cls, config: Mapping[str, Any]) -> Self:
        """Create settings from a config mapping. Unknown keys are rejected, missing keys fall back to the
        environment, then to their default."""
        return cls(**config)

    @classmethod
    def from_env(cls, prefix: str = DEFAULT_ENV_PREFIX) -> Self:
        """Create settings from environment variables named with prefix, e.g. MY_APP_PAGE_SIZE=50."""
        return cls(_env_prefix=prefix)
