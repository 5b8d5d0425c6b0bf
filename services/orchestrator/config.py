"""Orchestrator settings, read once from the environment at startup."""

import os
from dataclasses import dataclass

VIACEP_BASE_URL = "https://viacep.com.br/ws"
WEATHER_API_BASE_URL = "https://api.weatherapi.com/v1"


@dataclass(frozen=True)
class OrchestratorSettings:
    host: str = "0.0.0.0"
    port: int = 8081
    weather_api_key: str = ""
    viacep_base_url: str = VIACEP_BASE_URL
    weather_api_base_url: str = WEATHER_API_BASE_URL

    @classmethod
    def from_env(cls) -> "OrchestratorSettings":
        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8081")),
            # API_KEY is the name older deployments used
            weather_api_key=os.getenv("WEATHER_API_KEY", os.getenv("API_KEY", "")),
            viacep_base_url=os.getenv("VIACEP_BASE_URL", VIACEP_BASE_URL).rstrip("/"),
            weather_api_base_url=os.getenv("WEATHER_API_BASE_URL", WEATHER_API_BASE_URL).rstrip("/"),
        )
