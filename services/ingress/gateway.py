"""Decode, validate and forward one ingress request."""

from pydantic import ValidationError

from shared.errors import InvalidZipCodeError, MalformedRequestError
from shared.models import ZipCodeRequest
from shared.outcome import Outcome
from shared.zipcode import is_valid_zipcode


class ZipCodeGateway:
    def __init__(self, orchestrator):
        self.orchestrator = orchestrator

    async def submit(self, body: bytes) -> Outcome:
        try:
            request = ZipCodeRequest.model_validate_json(body)
        except ValidationError:
            return Outcome.failed(MalformedRequestError())

        if not is_valid_zipcode(request.cep):
            return Outcome.failed(InvalidZipCodeError())

        return await self.orchestrator.fetch_temperature(request.cep)
