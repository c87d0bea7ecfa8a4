import os
from dataclasses import dataclass, replace
from typing import Optional

from dotenv import load_dotenv

DEFAULT_REGION = "ap-southeast-1"
DEFAULT_TABLE = "CustomersOrdersProducts"

_TRUE = {"1", "true", "yes", "on"}


def _seconds(value):
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"INDEX_POLL_SECONDS must be a number of seconds, got {value!r}") from None


@dataclass(frozen=True)
class Settings:
    table: str = DEFAULT_TABLE
    region: str = DEFAULT_REGION
    endpoint_url: Optional[str] = None  # e.g. http://localhost:8000 for DynamoDB Local
    strict_type_checks: bool = False
    index_poll_seconds: float = 3.0
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, dotenv_path=None):
        """Read settings from the environment, after loading a .env file if present."""
        load_dotenv(dotenv_path)
        return cls(
            table=os.environ.get("TABLE", DEFAULT_TABLE),
            region=os.environ.get("AWS_REGION", DEFAULT_REGION),
            endpoint_url=os.environ.get("DYNAMODB_ENDPOINT") or None,
            strict_type_checks=os.environ.get("STRICT_TYPE_CHECKS", "").strip().lower() in _TRUE,
            index_poll_seconds=_seconds(os.environ.get("INDEX_POLL_SECONDS", "3")),
            log_level=os.environ.get("LOG_LEVEL", "WARNING").upper(),
        )

    def override(self, **values):
        """Copy with every non-None value applied."""
        return replace(self, **{k: v for k, v in values.items() if v is not None})
