"""
Recipe data models for the recipe graph engine.

This module defines the Pydantic models for canonical recipe records, the
shape handed to importers and serialized as JSON. Field aliases keep the
schema.org-style camelCase names on the wire.
"""
from __future__ import annotations

from typing import Any
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator


class JsonRecipeIngredient(BaseModel):
    """A structured representation of a single ingredient line.

    Attributes:
        name: The name of the ingredient (e.g., 'flour')
        quantity: Quantity text as written (e.g., '1', '1 1/2', '½')
        unit: Unit text as written (e.g., 'cup', 'g'); not checked against
            the unit registry
        preparation: Text after the first comma (e.g., 'sifted')
    """

    model_config = ConfigDict(frozen=True)

    name: str | None = Field(
        default=None,
        description="The name of the ingredient, e.g., 'all-purpose flour'"
    )
    quantity: str | None = Field(
        default=None,
        description="The quantity text, e.g., '1 1/2'"
    )
    unit: str | None = Field(
        default=None,
        description="The unit text, e.g., 'cups', 'g', 'tbsp'"
    )
    preparation: str | None = Field(
        default=None,
        description="How the ingredient is prepared, e.g., 'sifted'"
    )


class JsonRecipe(BaseModel):
    """The canonical record for one recipe found in a document.

    The three list fields are always present; a missing or null list is
    read as empty.
    """

    model_config = ConfigDict(populate_by_name=True)

    date_created: str | None = Field(default=None, alias="dateCreated")
    name: str | None = None
    source_url: str | None = Field(default=None, alias="sourceUrl")
    recipe_category: list[str] = Field(default_factory=list, alias="recipeCategory")
    recipe_ingredient: list[JsonRecipeIngredient] = Field(
        default_factory=list, alias="recipeIngredient")
    recipe_instructions: list[str] = Field(default_factory=list, alias="recipeInstructions")
    recipe_yield: str | None = Field(default=None, alias="recipeYield")
    error: str | None = None

    @field_validator("recipe_category", "recipe_ingredient", "recipe_instructions",
                     mode="before")
    @classmethod
    def _none_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("source_url")
    @classmethod
    def _absolute_url(cls, value: str | None) -> str | None:
        # Hostless URLs such as file:///tmp/r.html or urn:isbn:123 are absolute too.
        if value is None:
            return value
        if not urlparse(value).scheme:
            raise ValueError(f"sourceUrl must be an absolute URL: {value!r}")
        return value

    def to_json(self) -> dict[str, Any]:
        """Dump with camelCase keys, leaving out absent optional fields."""
        return self.model_dump(by_alias=True, exclude_none=True)
