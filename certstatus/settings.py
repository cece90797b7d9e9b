import os
from dataclasses import dataclass, field

@dataclass(frozen=True)
class Settings:
    LOG_LEVEL: str = field(default="INFO")
    CERT_DATA_KEY: str = field(default="tls.crt")

    @staticmethod
    def from_env() -> "Settings":
        log_level = os.getenv("CERTSTATUS_LOG_LEVEL", "INFO").upper()
        cert_key = os.getenv("CERTSTATUS_CERT_DATA_KEY", "").strip() or "tls.crt"
        return Settings(LOG_LEVEL=log_level, CERT_DATA_KEY=cert_key)
