"""Validate -> city -> weather -> convert, stopping at the first failure."""

from shared.errors import InvalidZipCodeError
from shared.models import TemperatureReport
from shared.outcome import Outcome
from shared.zipcode import is_valid_zipcode
from orchestrator.conversion import convert


class TemperaturePipeline:
    def __init__(self, city_resolver, weather_resolver):
        self.city_resolver = city_resolver
        self.weather_resolver = weather_resolver

    async def run(self, cep: str) -> Outcome:
        if not is_valid_zipcode(cep):
            return Outcome.failed(InvalidZipCodeError())

        city, error, status = await self.city_resolver.resolve(cep)
        if error is not None:
            return Outcome(None, error, status)

        # weather needs the resolved city; never run both lookups at once
        celsius, error, status = await self.weather_resolver.resolve(city)
        if error is not None:
            return Outcome(None, error, status)

        report = TemperatureReport(city=city, **convert(celsius)._asdict())
        return Outcome.ok(report)
