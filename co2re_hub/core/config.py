"""
Runtime settings loaded from the environment (and an optional .env file).
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from co2re_hub.core.constants import (
    CO2RE_BASE_URL,
    DEFAULT_DATABASE,
    DEFAULT_MONGO_URI,
    DOCUMENTS_COLLECTION,
    FUNDING_COLLECTION,
    REQUEST_TIMEOUT,
)


@dataclass
class Settings:
    """
    Settings shared by the CLI and the services.

    Attributes:
        mongo_uri: MongoDB connection string
        database: Database holding both collections
        documents_collection: Collection for CO2RE documents
        funding_collection: Collection for funding opportunities
        base_url: CO2RE site root
        request_timeout: HTTP timeout in seconds
        log_level: Root logging level name
        log_dir: Directory for run log files
    """
    mongo_uri: str = DEFAULT_MONGO_URI
    database: str = DEFAULT_DATABASE
    documents_collection: str = DOCUMENTS_COLLECTION
    funding_collection: str = FUNDING_COLLECTION
    base_url: str = CO2RE_BASE_URL
    request_timeout: int = REQUEST_TIMEOUT
    log_level: str = "INFO"
    log_dir: str = "logs"

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            env_file: Optional path to a .env file (defaults to ./.env)

        Returns:
            Settings instance
        """
        load_dotenv(env_file)

        return cls(
            mongo_uri=os.getenv("MONGODB_URI", os.getenv("MONGO_URI", DEFAULT_MONGO_URI)),
            database=os.getenv("MONGODB_DATABASE", DEFAULT_DATABASE),
            documents_collection=os.getenv("DOCUMENTS_COLLECTION", DOCUMENTS_COLLECTION),
            funding_collection=os.getenv("FUNDING_COLLECTION", FUNDING_COLLECTION),
            base_url=os.getenv("CO2RE_BASE_URL", CO2RE_BASE_URL).rstrip("/"),
            request_timeout=int(os.getenv("REQUEST_TIMEOUT", str(REQUEST_TIMEOUT))),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            log_dir=os.getenv("LOG_DIR", "logs"),
        )
