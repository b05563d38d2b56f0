"""Credential loading for the Jamf School client.

Credentials are read from explicit arguments first and then from the
environment (a local .env file is loaded with python-dotenv):

    JAMF_SCHOOL_ID      network ID
    JAMF_SCHOOL_TOKEN   API token
    JAMF_SCHOOL_URL     API base URL, e.g. https://school.jamfcloud.com/api
"""
import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .api.exceptions import ConfigurationError

load_dotenv()

logger = logging.getLogger(__name__)

ENV_ID = "JAMF_SCHOOL_ID"
ENV_TOKEN = "JAMF_SCHOOL_TOKEN"
ENV_URL = "JAMF_SCHOOL_URL"


@dataclass(frozen=True)
class Credentials:
    """Network ID, API token and base URL of a Jamf School instance."""

    id: str
    token: str
    url: str

    def __repr__(self) -> str:
        # Never show the token.
        return f"Credentials(id={self.id!r}, url={self.url!r})"

    @classmethod
    def resolve(
        cls,
        id: Optional[str] = None,
        token: Optional[str] = None,
        url: Optional[str] = None,
    ) -> "Credentials":
        """Build credentials from arguments, falling back to the environment.

        Raises:
            ConfigurationError: If any value is missing from both
        """
        id = id or os.getenv(ENV_ID)
        token = token or os.getenv(ENV_TOKEN)
        url = url or os.getenv(ENV_URL)

        missing = []
        if not id:
            missing.append(ENV_ID)
        if not token:
            missing.append(ENV_TOKEN)
        if not url:
            missing.append(ENV_URL)
        if missing:
            raise ConfigurationError(
                f"Missing required credentials: {', '.join(missing)}",
                missing_keys=missing,
            )

        logger.debug(f"Resolved credentials for network {id} at {url}")
        return cls(id=id, token=token, url=url)
