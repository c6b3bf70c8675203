"""Pydantic models for clinical scale specifications."""

from typing import Final, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

UNSCOREABLE: Final = "UN"
UNSCOREABLE_DISPLAY: Final = "No evaluable"

ResponseValue = int | Literal["UN"]


class ItemOption(BaseModel):
    """A selectable response for an item."""

    model_config = ConfigDict(frozen=True)

    value: ResponseValue
    text: str

    @field_validator("value")
    @classmethod
    def validate_value(cls, value: ResponseValue) -> ResponseValue:
        if isinstance(value, int) and value < 0:
            raise ValueError(f"Point values must be non-negative, got {value}")
        return value

    @property
    def is_unscoreable(self) -> bool:
        return self.value == UNSCOREABLE


class ItemDefinition(BaseModel):
    """Item (clinical observation slot) within a scale."""

    model_config = ConfigDict(frozen=True)

    item_id: str
    position: int
    label: str
    options: tuple[ItemOption, ...]

    @model_validator(mode="after")
    def validate_options(self) -> "ItemDefinition":
        """Require unique option values and at least one scoreable value."""
        values = [option.value for option in self.options]
        if len(values) != len(set(values)):
            raise ValueError(f"Item {self.item_id} has duplicate option values")
        if not any(not option.is_unscoreable for option in self.options):
            raise ValueError(f"Item {self.item_id} has no scoreable option")
        return self

    @property
    def allowed_values(self) -> frozenset[ResponseValue]:
        """All permitted response values, including the sentinel if allowed."""
        return frozenset(option.value for option in self.options)

    @property
    def point_values(self) -> tuple[int, ...]:
        """Scoreable point values in ascending order."""
        return tuple(sorted(o.value for o in self.options if not o.is_unscoreable))

    @property
    def accepts_unscoreable(self) -> bool:
        return UNSCOREABLE in self.allowed_values

    @property
    def max_points(self) -> int:
        return self.point_values[-1]

    def get_option(self, value: ResponseValue) -> ItemOption | None:
        """Get the option for a response value."""
        for option in self.options:
            if option.value == value:
                return option
        return None


class InterpretationBand(BaseModel):
    """Score interpretation band.

    Both ends are inclusive. A band without ``max_score`` is open-ended and
    may only be the top band of a scale.
    """

    model_config = ConfigDict(frozen=True)

    min_score: int = Field(ge=0)
    max_score: int | None = None
    label: str
    severity: str | None = None
    description: str | None = None

    @model_validator(mode="after")
    def validate_range(self) -> "InterpretationBand":
        if self.max_score is not None and self.max_score < self.min_score:
            raise ValueError(
                f"Band '{self.label}' has max_score {self.max_score} "
                f"below min_score {self.min_score}"
            )
        return self

    def contains(self, score: int) -> bool:
        """Check whether a total score falls inside this band."""
        if score < self.min_score:
            return False
        return self.max_score is None or score <= self.max_score


class SuggestionPattern(BaseModel):
    """Keyword pattern used to suggest a scale from clinical free text."""

    model_config = ConfigDict(frozen=True)

    keywords: tuple[str, ...] = Field(min_length=1)
    reason: str
    base_confidence: float = Field(gt=0.0, le=1.0)


class ScaleDefinition(BaseModel):
    """Complete clinical scale specification."""

    model_config = ConfigDict(frozen=True)

    type: Literal["scale_spec"]
    scale_id: str
    version: str
    name: str
    category: str
    description: str | None = None
    aliases: tuple[str, ...] = ()
    items: tuple[ItemDefinition, ...] = Field(min_length=1)
    interpretation_bands: tuple[InterpretationBand, ...] = Field(min_length=1)
    suggestion: SuggestionPattern | None = None

    @model_validator(mode="after")
    def validate_structure(self) -> "ScaleDefinition":
        item_ids = [item.item_id for item in self.items]
        duplicates = sorted({i for i in item_ids if item_ids.count(i) > 1})
        if duplicates:
            raise ValueError(f"Duplicate item ids in {self.scale_id}: {duplicates}")

        positions = [item.position for item in self.items]
        if positions != list(range(1, len(self.items) + 1)):
            raise ValueError(
                f"Item positions in {self.scale_id} must run 1..{len(self.items)} "
                f"in item order, got {positions}"
            )

        # Only the last band may be open-ended
        for band in self.interpretation_bands[:-1]:
            if band.max_score is None:
                raise ValueError(
                    f"Open-ended band '{band.label}' in {self.scale_id} "
                    "must be the last band"
                )
        return self

    @property
    def item_ids(self) -> tuple[str, ...]:
        return tuple(item.item_id for item in self.items)

    @property
    def max_possible_score(self) -> int:
        """Sum of the largest point value of every item."""
        return sum(item.max_points for item in self.items)

    def get_item(self, item_id: str) -> ItemDefinition | None:
        """Get an item by its ID."""
        for item in self.items:
            if item.item_id == item_id:
                return item
        return None
