"""Advisory record emitted by the recommendation engine."""

from pydantic import BaseModel, ConfigDict, Field

from .enums import AdvisoryType, Severity


class Advisory(BaseModel):
    """One recommended action for a card."""

    model_config = ConfigDict(frozen=True)

    card_id: str = Field(serialization_alias="cardId")
    card_title: str = Field(serialization_alias="cardTitle")
    type: AdvisoryType
    reason: str
    severity: Severity
    action: str

    def to_dict(self) -> dict:
        """Serialize with the camel-case keys the boundary layer exposes."""
        return self.model_dump(mode="json", by_alias=True)
