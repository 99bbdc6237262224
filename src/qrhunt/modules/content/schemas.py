"""Pydantic schemas for site content."""

from pydantic import BaseModel, Field, field_validator

from qrhunt.core.constants import MAX_CONTENT_VALUE_LENGTH, SITE_CONTENT_DEFAULTS


class SiteContentPublic(BaseModel):
    """Every site text with defaults applied."""

    content: dict[str, str]


class SiteContentEntry(BaseModel):
    """One editable text as shown to tenant admins."""

    key: str
    description: str
    value: str
    is_default: bool


class SiteContentUpdate(BaseModel):
    """New values by key. An empty value restores the default."""

    values: dict[str, str] = Field(..., min_length=1)

    @field_validator("values")
    @classmethod
    def validate_values(cls, v: dict[str, str]) -> dict[str, str]:
        unknown = sorted(set(v) - set(SITE_CONTENT_DEFAULTS))
        if unknown:
            raise ValueError(f"Unknown content keys: {', '.join(unknown)}")
        too_long = sorted(
            key for key, text in v.items() if len(text) > MAX_CONTENT_VALUE_LENGTH
        )
        if too_long:
            raise ValueError(
                f"Values longer than {MAX_CONTENT_VALUE_LENGTH} characters: "
                + ", ".join(too_long)
            )
        return {key: text.strip() for key, text in v.items()}
