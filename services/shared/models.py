"""Pydantic models for request/response across both services."""

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class ZipCodeRequest(BaseModel):
    """Ingress request payload."""
    cep: str = ""


class TemperatureReport(BaseModel):
    """Final response: the city and its current temperature in three scales."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    city: str
    celsius: float = Field(alias="temp_C")
    fahrenheit: float = Field(alias="temp_F")
    kelvin: float = Field(alias="temp_K")

    @field_serializer("celsius", "fahrenheit", "kelvin")
    def _round_for_wire(self, value: float) -> float:
        return round(value, 2)

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True)


class ErrorEnvelope(BaseModel):
    """JSON error body: {"message": "..."}."""
    message: str = ""
