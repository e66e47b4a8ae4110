"""Base model for all Lingobox Pydantic models."""

from pydantic import BaseModel, ConfigDict


class LingoboxBaseModel(BaseModel):
    """Base model class for all Lingobox Pydantic models.

    Unknown keys from manifests and configuration files are ignored, enums
    stay enum members, and assignments are validated. Strings are kept
    verbatim since models carry script and source map content.
    """

    model_config = ConfigDict(
        extra="ignore",
        use_enum_values=False,
        validate_assignment=True,
    )
