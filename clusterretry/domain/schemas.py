from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .errors import ConfigurationError


class WriteConcern(BaseModel):
    """Write concern attached to a write operation.

    Only the acknowledged/unacknowledged distinction matters to the retry
    core; the remaining fields are kept so callers can pass the same object
    down to the transport.
    """

    model_config = ConfigDict(frozen=True)

    w: Union[int, str] = 1
    journal: Optional[bool] = None
    wtimeout: Optional[int] = Field(default=None, ge=0)

    @field_validator("w")
    @classmethod
    def _check_w(cls, value: Union[int, str]) -> Union[int, str]:
        if isinstance(value, int) and value < 0:
            raise ConfigurationError(f"w must be >= 0, got {value}")
        if isinstance(value, str) and not value:
            raise ConfigurationError("w tag must not be empty")
        return value

    @model_validator(mode="after")
    def _check_journal(self) -> "WriteConcern":
        if self.w == 0 and self.journal:
            raise ConfigurationError("journal=True cannot be combined with w=0")
        return self

    @property
    def acknowledged(self) -> bool:
        return self.w != 0

    @classmethod
    def unacknowledged(cls) -> "WriteConcern":
        return cls(w=0)
