"""City and weather lookups against the two external providers.

Both resolvers answer with an ``Outcome`` triple instead of raising, so
the pipeline can stop at the first failing step and relay its status.
"""

from typing import Optional

from pydantic import BaseModel, Field

from shared.errors import (
    InvalidZipCodeError,
    MissingCredentialError,
    PipelineError,
    UpstreamError,
    ZipCodeNotFoundError,
)
from shared.lookup_client import LookupClient
from shared.outcome import Outcome
from shared.zipcode import is_valid_zipcode
from orchestrator.config import VIACEP_BASE_URL, WEATHER_API_BASE_URL


class ViaCepAddress(BaseModel):
    """Postal-code directory answer. Unknown codes come back without a city, or with null."""
    city: Optional[str] = Field(default="", alias="localidade")


class CurrentConditions(BaseModel):
    temp_c: float


class WeatherReading(BaseModel):
    """Weather provider answer for GET /current.json."""
    current: CurrentConditions


class CityResolver:
    """Resolve a CEP to its city name."""

    def __init__(self, lookup: LookupClient, base_url: str = VIACEP_BASE_URL):
        self.lookup = lookup
        self.base_url = base_url

    async def resolve(self, cep: str) -> Outcome:
        if not is_valid_zipcode(cep):
            return Outcome.failed(InvalidZipCodeError(), "")

        try:
            address = await self.lookup.fetch(f"{self.base_url}/{cep}/json", ViaCepAddress)
        except UpstreamError as e:
            if e.status_code == 404:
                return Outcome.failed(ZipCodeNotFoundError(), "")
            return Outcome.failed(e, "")
        except PipelineError as e:
            return Outcome.failed(e, "")

        if not address.city:
            return Outcome.failed(ZipCodeNotFoundError(), "")

        return Outcome.ok(address.city)


class WeatherResolver:
    """Resolve a city name to its current temperature in Celsius."""

    def __init__(self, lookup: LookupClient, api_key: str, base_url: str = WEATHER_API_BASE_URL):
        self.lookup = lookup
        self.api_key = api_key
        self.base_url = base_url

    async def resolve(self, city: str) -> Outcome:
        if not self.api_key:
            return Outcome.failed(MissingCredentialError(), 0.0)

        # httpx percent-encodes the query, including accented city names
        params = {"key": self.api_key, "q": city, "lang": "pt"}
        try:
            reading = await self.lookup.fetch(
                f"{self.base_url}/current.json", WeatherReading, params=params
            )
        except PipelineError as e:
            return Outcome.failed(e, 0.0)

        return Outcome.ok(reading.current.temp_c)
