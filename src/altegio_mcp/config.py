import os
import logging
import functools
from dataclasses import dataclass
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

load_dotenv()

DEFAULT_BASE_URL = "https://api.alteg.io/api/v1"

REQUIRED_ENV = ("ALTEGIO_TOKEN", "ALTEGIO_USER_TOKEN", "ALTEGIO_COMPANY_ID")


class ConfigurationError(ValueError):
    """Raised when required Altegio credentials are missing from the environment."""


@dataclass(frozen=True)
class AltegioConfig:
    partner_token: str
    user_token: str
    company_id: str
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 30.0

    @classmethod
    def from_env(cls) -> "AltegioConfig":
        """
        Build the configuration from ALTEGIO_* environment variables.

        ALTEGIO_TOKEN (partner token), ALTEGIO_USER_TOKEN and ALTEGIO_COMPANY_ID
        are required. ALTEGIO_BASE_URL and ALTEGIO_TIMEOUT are optional.
        """
        missing = [name for name in REQUIRED_ENV if not os.getenv(name)]
        if missing:
            raise ConfigurationError(f"Missing env: {', '.join(missing)}")

        try:
            timeout = float(os.getenv("ALTEGIO_TIMEOUT", "30"))
        except ValueError:
            raise ConfigurationError(f"ALTEGIO_TIMEOUT must be a number of seconds, got {os.getenv('ALTEGIO_TIMEOUT')!r}")

        return cls(
            partner_token=os.environ["ALTEGIO_TOKEN"],
            user_token=os.environ["ALTEGIO_USER_TOKEN"],
            company_id=os.environ["ALTEGIO_COMPANY_ID"],
            base_url=os.getenv("ALTEGIO_BASE_URL", DEFAULT_BASE_URL),
            timeout=timeout,
        )


@functools.lru_cache(maxsize=1)
def load_config() -> AltegioConfig:
    """Read the process-wide configuration once; later calls return the same object."""
    config = AltegioConfig.from_env()
    logger.info(f"Loaded Altegio configuration for company {config.company_id} ({config.base_url})")
    return config
