import os
from dataclasses import dataclass, field
from typing import List, Optional

_FALSEY = {"0", "false", "no", "off"}


def _split_origins(raw: str) -> List[str]:
    return [o.strip() for o in raw.split(",") if o.strip()]


@dataclass
class Settings:
    """Service configuration, read from the environment."""

    host: str = "0.0.0.0"
    port: int = 5000
    mongodb_uri: Optional[str] = None
    mongodb_db: str = "vibe_commerce"
    cors_origins: List[str] = field(default_factory=lambda: ["http://localhost:5173"])
    seed_catalog: bool = True

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", 5000)),
            mongodb_uri=os.getenv("MONGODB_URI") or None,
            mongodb_db=os.getenv("MONGODB_DB", "vibe_commerce"),
            cors_origins=_split_origins(os.getenv("CORS_ORIGINS", "http://localhost:5173")),
            seed_catalog=os.getenv("SEED_CATALOG", "true").lower() not in _FALSEY,
        )
