"""Ingress settings, read once from the environment at startup."""

import os
from dataclasses import dataclass

ORCHESTRATOR_URL = "http://localhost:8081"


@dataclass(frozen=True)
class IngressSettings:
    host: str = "0.0.0.0"
    port: int = 8080
    orchestrator_url: str = ORCHESTRATOR_URL

    @classmethod
    def from_env(cls) -> "IngressSettings":
        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8080")),
            orchestrator_url=os.getenv("SERVICE_B_URL", ORCHESTRATOR_URL),
        )
