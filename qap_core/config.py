"""
Runtime settings read from the environment (and an optional .env file)
"""
import os
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

from dotenv import load_dotenv

from .errors import QAPError

T = TypeVar("T")

DEFAULT_LOOKUP_DELAY_S = 1.5
DEFAULT_VOLUME_THRESHOLD = 10
DEFAULT_PROXIMITY_THRESHOLD_KM = 5.0


def _env_value(name: str, cast: Callable[[str], T], default: Optional[T]) -> Optional[T]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw.strip())
    except ValueError as e:
        raise QAPError(f"Invalid value for {name}: {raw!r}") from e


@dataclass(frozen=True)
class Settings:
    amenity_seed: Optional[int] = None
    lookup_delay_s: float = DEFAULT_LOOKUP_DELAY_S
    volume_threshold: int = DEFAULT_VOLUME_THRESHOLD
    proximity_threshold_km: float = DEFAULT_PROXIMITY_THRESHOLD_KM
    log_level: str = "INFO"
    report_dir: str = "reports"

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "Settings":
        """
        Build settings from QAP_* environment variables.

        Values already present in the environment win over the .env file.
        """
        load_dotenv(dotenv_path=dotenv_path, override=False)

        settings = cls(
            amenity_seed=_env_value("QAP_AMENITY_SEED", int, None),
            lookup_delay_s=_env_value("QAP_LOOKUP_DELAY_S", float, DEFAULT_LOOKUP_DELAY_S),
            volume_threshold=_env_value("QAP_VOLUME_THRESHOLD", int, DEFAULT_VOLUME_THRESHOLD),
            proximity_threshold_km=_env_value(
                "QAP_PROXIMITY_THRESHOLD_KM", float, DEFAULT_PROXIMITY_THRESHOLD_KM
            ),
            log_level=os.getenv("QAP_LOG_LEVEL", "INFO").strip() or "INFO",
            report_dir=os.getenv("QAP_REPORT_DIR", "reports").strip() or "reports",
        )

        if settings.lookup_delay_s < 0:
            raise QAPError("QAP_LOOKUP_DELAY_S must not be negative")
        if settings.volume_threshold <= 0:
            raise QAPError("QAP_VOLUME_THRESHOLD must be positive")
        if settings.proximity_threshold_km <= 0:
            raise QAPError("QAP_PROXIMITY_THRESHOLD_KM must be positive")
        return settings
