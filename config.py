"""
Environment-derived configuration for the vision agent.

Values are read once into frozen dataclasses which are then passed
explicitly to the adapter and ORA client constructors.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

DEFAULT_CREDENTIALS_FILE = "google-credentials.json"
DEFAULT_ORA_API_URL = "https://api.ora.ai/api/v1/query"


@dataclass(frozen=True)
class VisionConfig:
    """Google Cloud Vision configuration."""

    credentials_path: str

    @classmethod
    def from_env(cls) -> "VisionConfig":
        path = os.getenv("GOOGLE_APPLICATION_CREDENTIALS") or os.path.join(
            os.getcwd(), DEFAULT_CREDENTIALS_FILE
        )
        return cls(credentials_path=path)


@dataclass(frozen=True)
class OraConfig:
    """ORA API configuration. `mode` is "simulated" or "remote"."""

    api_key: str = "mock-api-key"
    api_url: str = DEFAULT_ORA_API_URL
    mode: str = "simulated"
    simulated_latency: float = 0.0
    timeout: float = 30.0

    @classmethod
    def from_env(cls) -> "OraConfig":
        return cls(
            api_key=os.getenv("ORA_API_KEY", "mock-api-key"),
            api_url=os.getenv("ORA_API_URL", DEFAULT_ORA_API_URL),
            mode=os.getenv("ORA_MODE", "simulated").lower(),
            simulated_latency=float(os.getenv("ORA_SIMULATED_LATENCY", "0")),
            timeout=float(os.getenv("ORA_TIMEOUT", "30")),
        )


@dataclass(frozen=True)
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 3000

    @classmethod
    def from_env(cls) -> "ServerConfig":
        return cls(
            host=os.getenv("SERVER_HOST", "0.0.0.0"),
            port=int(os.getenv("SERVER_PORT", "3000")),
        )
