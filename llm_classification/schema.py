"""Classification output contract."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from llm_classification.categories import word_in_list


class Classification(BaseModel):
    """Accepted (domain, category) pair.

    The category is always a single allow-list label; anything else is
    rejected at construction time.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        str_strip_whitespace=True,
    )

    domain: str = Field(min_length=1)
    category: str = Field(min_length=1)

    @field_validator("category")
    @classmethod
    def _category_in_allow_list(cls, value: str) -> str:
        if not word_in_list(value):
            raise ValueError(f"category {value!r} is not an allow-list label")
        return value

    def to_log_line(self) -> str:
        """Render as one success-log row: ``domain,category``."""
        return f"{self.domain},{self.category}"
