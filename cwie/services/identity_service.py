"""
Identity verification against the university LDAP gateway.

The gateway is a plain HTTPS endpoint taking the username and the password
encoded as hexadecimal UTF-8 bytes. A successful lookup returns the canonical
identity record; anything else is treated as bad credentials.
"""
import logging
import ssl
from typing import Optional

import httpx
from pydantic import BaseModel, ValidationError

from cwie.core.exceptions import UnauthenticatedError

logger = logging.getLogger(__name__)


class IdentityRecord(BaseModel):
    """Identity as returned by the LDAP gateway."""

    username: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    faculty: Optional[str] = None


def encode_password(password: str) -> str:
    """Hex representation of the password's UTF-8 bytes."""
    return password.encode("utf-8").hex()


class IdentityVerifier:
    """LDAP gateway client (single attempt, no retries)."""

    def __init__(
        self,
        api_url: str,
        ca_bundle: str = "",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_url = api_url
        self.transport = transport
        # Certificate validation is always on; a custom CA may be supplied
        self.verify = ssl.create_default_context(cafile=ca_bundle) if ca_bundle else True

    async def verify_credentials(self, username: str, password: str) -> IdentityRecord:
        """Verify a username/password pair and return the identity record."""
        try:
            async with httpx.AsyncClient(verify=self.verify, transport=self.transport) as client:
                response = await client.get(
                    self.api_url,
                    params={"username": username, "password": encode_password(password)},
                )
                response.raise_for_status()
                data = response.json()

            if not isinstance(data, dict) or not data.get("username"):
                raise UnauthenticatedError("Invalid credentials")

            return IdentityRecord.model_validate(data)

        except UnauthenticatedError:
            logger.warning(f"LDAP authentication rejected for {username}")
            raise UnauthenticatedError("LDAP authentication failed")
        except (httpx.HTTPError, ValueError, ValidationError) as e:
            logger.error(f"LDAP authentication failed: {type(e).__name__}: {e}")
            raise UnauthenticatedError("LDAP authentication failed")
