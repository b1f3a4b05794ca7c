"""Record model for one decoded rtl_433 transmission."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidatorFunctionWrapHandler,
    field_validator,
)

from ..coercion import coerce_timestamp, coerce_yes_no, utc_now

log = logging.getLogger(__name__)


class RTL433Message(BaseModel):
    """Normalized rtl_433 message.

    Only ``time`` is guaranteed to carry a real value; it falls back to the
    current time when missing or unreadable. ``model`` and ``mic`` default
    to empty strings and every other field is None when absent or malformed.
    Unknown keys in the source JSON are ignored.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    time: datetime = Field(default_factory=utc_now)
    model: str = ""
    id: Optional[int] = None
    channel: Optional[int] = None
    temperature_c: Optional[float] = Field(default=None, alias="temperature_C")
    humidity: Optional[int] = None
    battery_ok: Optional[float] = None
    test: Optional[bool] = None
    mic: str = ""

    @field_validator("time", mode="before")
    @classmethod
    def coerce_time(cls, value: Any) -> datetime:
        """Accept any rtl_433 timestamp shape, warning on unknown ones."""

        instant, warning = coerce_timestamp(value)
        if warning:
            log.warning(warning)
        return instant

    @field_validator("test", mode="before")
    @classmethod
    def coerce_test(cls, value: Any) -> Optional[bool]:
        return coerce_yes_no(value)

    @field_validator(
        "id", "channel", "temperature_c", "humidity", "battery_ok", mode="wrap"
    )
    @classmethod
    def absent_when_malformed(
        cls, value: Any, handler: ValidatorFunctionWrapHandler
    ) -> Any:
        try:
            return handler(value)
        except ValidationError:
            return None

    @field_validator("model", "mic", mode="wrap")
    @classmethod
    def empty_when_malformed(
        cls, value: Any, handler: ValidatorFunctionWrapHandler
    ) -> str:
        try:
            return handler(value)
        except ValidationError:
            return ""

    def to_json_dict(self) -> Dict[str, Any]:
        """Serialize using rtl_433 key names, dropping absent fields."""

        data = self.model_dump(mode="json", by_alias=True, exclude_none=True)
        data["time"] = (
            self.time.astimezone(timezone.utc)
            .isoformat()
            .replace("+00:00", "Z")
        )
        return data


__all__ = ["RTL433Message"]
