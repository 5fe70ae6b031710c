"""Common pydantic base for the step's models."""

from typing import Any

from pydantic import BaseModel, ConfigDict


class KoverBaseModel(BaseModel):
    """Validated on assignment; dumps to JSON-compatible dicts for logging."""

    model_config = ConfigDict(
        str_strip_whitespace=True,
        use_enum_values=True,
        validate_assignment=True,
    )

    def to_dict(self) -> dict[str, Any]:
        """Fields that were set, paths and datetimes rendered as strings."""
        return self.model_dump(by_alias=True, exclude_unset=True, mode="json")
