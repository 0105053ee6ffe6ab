"""Configuration schema for Vendor Status using nested Pydantic models."""

import re
from typing import Annotated, ClassVar

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from ..utils.core.exceptions import InvalidTimezoneError
from ..utils.time.civil import ZoneCache
from ..utils.time.recurrence import Weekday


TIME_OF_DAY_PATTERN = r"^([01]?[0-9]|2[0-3]):[0-5][0-9]$"
# Id and token shapes are the ones discord.Webhook.from_url accepts
WEBHOOK_URL_PATTERN = (
    r"^https://(?:(?:ptb|canary)\.)?discord(?:app)?\.com/api"
    r"(?:/v\d+)?/webhooks/(?P<id>\d{17,20})/(?P<token>[A-Za-z0-9._-]{60,})/?$"
)
CANONICAL_WEBHOOK_URL = "https://discord.com/api/webhooks/{id}/{token}"

DEFAULT_TIMEZONE = "America/New_York"


def _validate_timezone(value: str) -> str:
    try:
        _ = ZoneCache().get(value)
    except InvalidTimezoneError as e:
        raise ValueError(e.user_message) from e
    return value


def _parse_weekday(value: object) -> object:
    if isinstance(value, str | int):
        return Weekday.parse(value)
    return value


TimezoneName = Annotated[str, AfterValidator(_validate_timezone)]
WeekdayName = Annotated[Weekday, BeforeValidator(_parse_weekday)]


def _split_time(value: str) -> tuple[int, int]:
    hour, minute = map(int, value.split(":"))
    return hour, minute


class WebhookConfig(BaseModel):
    """Discord webhook configuration."""

    url: str | None = Field(
        default=None,
        description="Discord webhook URL (usually supplied via DISCORD_WEBHOOK_URL)",
    )
    message_id: Annotated[int, Field(gt=0)] | None = Field(
        default=None,
        description="ID of the message to edit; when unset a new message is created",
    )
    username: str | None = Field(
        default=None,
        description="Display name override for messages created by the webhook",
        max_length=80,
    )

    @field_validator("url")
    @classmethod
    def validate_webhook_url(cls, v: str | None) -> str | None:
        """Validate and normalize the webhook URL."""
        if v is None or v == "":
            return None
        match = re.match(WEBHOOK_URL_PATTERN, v)
        if match is None:
            raise ValueError(
                "Webhook URL must look like https://discord.com/api/webhooks/<id>/<token>"
            )
        return CANONICAL_WEBHOOK_URL.format(id=match["id"], token=match["token"])

    @field_validator("message_id", mode="before")
    @classmethod
    def empty_message_id_is_unset(cls, v: object) -> object:
        """Treat an empty or blank message ID as not supplied."""
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v


class WeeklyResetConfig(BaseModel):
    """Weekly reset rule: one weekday and time of day in a timezone."""

    timezone: TimezoneName = Field(
        default=DEFAULT_TIMEZONE,
        description="IANA timezone the reset time is defined in",
    )
    weekday: WeekdayName = Field(
        default=Weekday.TUESDAY,
        description="Day of the week the reset happens on",
    )
    time: str = Field(
        default="03:30",
        description="Local time of the reset in HH:MM format",
        pattern=TIME_OF_DAY_PATTERN,
    )

    @property
    def hour(self) -> int:
        return _split_time(self.time)[0]

    @property
    def minute(self) -> int:
        return _split_time(self.time)[1]


class VendorConfig(BaseModel):
    """A vendor that is open for part of a fixed repeating cycle."""

    name: str = Field(..., min_length=1, description="Name shown in the status message")
    timezone: TimezoneName = Field(
        default=DEFAULT_TIMEZONE,
        description="IANA timezone the weekly anchor is defined in",
    )
    anchor_weekday: WeekdayName = Field(
        default=Weekday.WEDNESDAY,
        description="Weekday of the weekly cycle anchor",
    )
    anchor_time: str = Field(
        default="03:00",
        description="Local time of the weekly cycle anchor in HH:MM format",
        pattern=TIME_OF_DAY_PATTERN,
    )
    cycle_hours: Annotated[float, Field(gt=0, le=24 * 7)] = Field(
        default=56.0,
        description="Hours from one opening to the next",
    )
    open_hours: Annotated[float, Field(gt=0)] = Field(
        default=24.0,
        description="Hours the vendor stays open in each cycle",
    )

    @model_validator(mode="after")
    def validate_open_within_cycle(self) -> "VendorConfig":
        """The open part of the cycle must be shorter than the cycle.

        Compared in whole seconds, the resolution the schedule is computed in.
        """
        if self.open_duration < 1:
            raise ValueError(
                f"open_hours ({self.open_hours}) must be at least one second"
            )
        if self.open_duration >= self.cycle_length:
            raise ValueError(
                f"open_hours ({self.open_hours}) must be less than "
                f"cycle_hours ({self.cycle_hours})"
            )
        return self

    @property
    def anchor_hour(self) -> int:
        return _split_time(self.anchor_time)[0]

    @property
    def anchor_minute(self) -> int:
        return _split_time(self.anchor_time)[1]

    @property
    def cycle_length(self) -> int:
        """Cycle length in seconds."""
        return round(self.cycle_hours * 3600)

    @property
    def open_duration(self) -> int:
        """Open duration in seconds."""
        return round(self.open_hours * 3600)


def _default_vendors() -> list[VendorConfig]:
    return [VendorConfig(name="Cassie Mendoza"), VendorConfig(name="Danny Weaver")]


class ScheduleConfig(BaseModel):
    """Schedules rendered in the status message."""

    weekly_reset: WeeklyResetConfig = Field(default_factory=WeeklyResetConfig)
    vendors: list[VendorConfig] = Field(default_factory=_default_vendors)

    @field_validator("vendors")
    @classmethod
    def validate_unique_names(cls, v: list[VendorConfig]) -> list[VendorConfig]:
        """Vendor names must be unique."""
        names = [vendor.name for vendor in v]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate vendor names: {', '.join(duplicates)}")
        return v


class AppearanceConfig(BaseModel):
    """Embed appearance configuration."""

    title: str = Field(
        default="The Division 2 — Vendors Status",
        max_length=256,
    )
    color: str = Field(
        default="#F97316",
        description="Embed color in hex format",
        pattern=r"^#[0-9a-fA-F]{6}$",
    )
    footer: str = Field(
        default="Times render in each user's local timezone",
        max_length=2048,
    )
    initial_content: str = Field(
        default="TD2 Vendors — initializing…",
        description="Plain message content sent with the embed when the message is created",
        max_length=2000,
    )

    @field_validator("color")
    @classmethod
    def normalize_color(cls, v: str) -> str:
        """Normalize color values to lowercase."""
        return v.lower()

    @property
    def color_value(self) -> int:
        """Embed color as an integer."""
        return int(self.color[1:], 16)


class LinkConfig(BaseModel):
    """A labelled link listed at the end of the status message."""

    label: str = Field(..., min_length=1)
    url: str = Field(..., pattern=r"^https?://.*")


def _default_links() -> list[LinkConfig]:
    return [
        LinkConfig(
            label="Weekly list (Ruben Alamina)",
            url="https://rubenalamina.mx/the-division-weekly-vendor-reset/",
        ),
        LinkConfig(
            label="Reset timers",
            url="https://division.zone/the-division-2/reset-timers/",
        ),
    ]


class VendorStatusConfig(BaseModel):
    """
    Configuration model for Vendor Status with nested structure.

    Every section has defaults, so an empty file (or no file at all) together
    with the DISCORD_WEBHOOK_URL environment variable is a complete setup.
    """

    webhook: WebhookConfig = Field(default_factory=WebhookConfig)
    schedule: ScheduleConfig = Field(default_factory=ScheduleConfig)
    appearance: AppearanceConfig = Field(default_factory=AppearanceConfig)
    links: list[LinkConfig] = Field(default_factory=_default_links)

    model_config: ClassVar[ConfigDict] = ConfigDict(
        str_strip_whitespace=True,
        validate_assignment=True,
        extra="forbid",
        frozen=False,
    )
