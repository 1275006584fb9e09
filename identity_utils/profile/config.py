from pydantic import BaseModel, Field


class ProfileParserConfig(BaseModel):
    """Configuration for user profile parsing."""

    # Date handling: abort the whole parse on an invalid `created_at` when strict,
    # otherwise drop the field and log a warning
    strict_dates: bool = Field(default=True)

    # Document Validation
    reject_empty_object: bool = Field(default=True)

    # Extra info claim used as the profile id when `user_id` is missing
    id_fallback_claim: str = Field(default="sub")

    class Config:
        frozen = True
