"""Runtime configuration read from the environment."""

import os
from dataclasses import dataclass

from dotenv import load_dotenv


@dataclass(frozen=True)
class Config:
    mongo_uri: str = ""


def load_config() -> Config:
    """Load ``.env`` if present, then read MONGO_URI."""
    load_dotenv(".env")
    return Config(mongo_uri=os.environ.get("MONGO_URI", ""))