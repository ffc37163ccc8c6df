from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

NO_CONTRACT = "No Contract"


class Frequency(str, Enum):
    DAILY = "DAILY"
    MONTHLY = "MONTHLY"
    QUARTERLY = "QUARTERLY"
    SIX_MONTHS = "SIX_MONTHS"
    YEARLY = "YEARLY"
    TWO_YEARS = "TWO_YEARS"
    THREE_YEARS = "THREE_YEARS"


class ContractTerm(BaseModel):
    """A plan's billing frequency and minimum commitment, labelled for display.

    `minimum_service_length` is None for plans without a contract; on the wire
    it is rendered as the number in text form or "No Contract".
    """

    model_config = ConfigDict(populate_by_name=True)

    frequency: str = ""
    minimum_service_length: int | None = Field(None, alias="minimumServiceLength")
    label: str | None = None

    @field_validator("minimum_service_length", mode="before")
    @classmethod
    def _parse_length(cls, value):
        if value is None or value == "" or value == NO_CONTRACT:
            return None
        if isinstance(value, str):
            try:
                return int(value.strip(), 10)
            except ValueError as exc:
                raise ValueError("minimumServiceLength must be a whole number or 'No Contract'") from exc
        return value

    def to_wire(self) -> dict:
        length = NO_CONTRACT if self.minimum_service_length is None else str(self.minimum_service_length)
        return {"frequency": self.frequency, "minimumServiceLength": length, "label": self.label}


class DiscountRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_id: int | str = Field(..., alias="productId")
    edition_id: int | str = Field(..., alias="editionId")
    discount_code_name: str = Field(..., alias="discountCodeName", min_length=1, max_length=255)
    discount_percentage: float = Field(..., alias="discountPercentage", gt=0, le=100)
    contract_term: ContractTerm = Field(..., alias="contractTerm")

    @field_validator("discount_code_name")
    @classmethod
    def _strip_code(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("discountCodeName must not be blank")
        return value
