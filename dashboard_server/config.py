import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class ConfigurationError(RuntimeError):
    """Raised when a required environment variable is not set."""


@dataclass(frozen=True)
class Settings:
    supabase_url: Optional[str]
    supabase_service_role_key: Optional[str]
    supabase_anon_key: Optional[str]
    invoices_table: str = "invoices"
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            supabase_url=os.getenv("SUPABASE_URL"),
            supabase_service_role_key=os.getenv("SUPABASE_SERVICE_ROLE_KEY"),
            supabase_anon_key=os.getenv("SUPABASE_KEY"),
            invoices_table=os.getenv("INVOICES_TABLE", "invoices"),
            api_host=os.getenv("API_HOST", "0.0.0.0"),
            api_port=int(os.getenv("API_PORT", 8000)),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def require(self, *fields: str) -> None:
        """Fail fast with the environment variable names that are missing."""
        env_names = {
            "supabase_url": "SUPABASE_URL",
            "supabase_service_role_key": "SUPABASE_SERVICE_ROLE_KEY",
            "supabase_anon_key": "SUPABASE_KEY",
        }
        missing = [env_names.get(name, name.upper()) for name in fields if not getattr(self, name)]
        if missing:
            raise ConfigurationError(f"Missing required environment variables: {', '.join(missing)}")


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)
