"""Configuration for the linked-data DAO."""

from pydantic import BaseModel, Field, field_validator

DEFAULT_ID_BASE_PATH = "http://localhost/ld/"


class DaoConfig(BaseModel):
    """Configuration for MongoLinkedDataDao."""

    # Prefix of every generated @id
    id_base_path: str = DEFAULT_ID_BASE_PATH

    # None keeps retrying until a free identifier is found
    max_id_attempts: int | None = Field(default=None, ge=1)

    @field_validator("id_base_path")
    @classmethod
    def validate_id_base_path(cls, v: str) -> str:
        """Validate that the identifier base path is provided."""
        if not v.strip():
            raise ValueError("Identifier base path cannot be empty")
        return v
