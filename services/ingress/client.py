"""HTTP client for the orchestrator service."""

from typing import Mapping, Optional

import httpx
from pydantic import ValidationError

from shared.errors import InternalError, UpstreamError
from shared.models import ErrorEnvelope, TemperatureReport
from shared.outcome import Outcome
from ingress.config import ORCHESTRATOR_URL


class OrchestratorClient:
    """Forwards a validated CEP to the orchestrator and relays its answer."""

    def __init__(self, http_client: httpx.AsyncClient, base_url: str = ORCHESTRATOR_URL):
        self._http = http_client
        self.base_url = base_url

    async def fetch_temperature(self, cep: str, headers: Optional[Mapping[str, str]] = None) -> Outcome:
        """
        GET {base_url}?cep=<cep>.

        Returns:
            Outcome with the TemperatureReport on 200; the orchestrator's
            message and status otherwise; 500 when it cannot be reached.
        """
        try:
            response = await self._http.get(self.base_url, params={"cep": cep}, headers=headers)
        except (httpx.HTTPError, httpx.InvalidURL):
            return Outcome.failed(InternalError("error sending request to orchestrator"))

        if response.status_code != 200:
            try:
                envelope = ErrorEnvelope.model_validate_json(response.content)
            except ValidationError:
                envelope = ErrorEnvelope(message=response.reason_phrase)
            return Outcome.failed(UpstreamError(response.status_code, envelope.message))

        try:
            report = TemperatureReport.model_validate_json(response.content)
        except ValidationError:
            return Outcome.failed(InternalError("error parsing response from orchestrator"))

        return Outcome.ok(report)
