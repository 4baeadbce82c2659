"""
Company name autocomplete for the bill form.

Suggestions are advisory only: any failure returns an empty list so the user
can still type a bill name by hand.
"""
import logging
from typing import List, Optional

import httpx
from pydantic import BaseModel, TypeAdapter

from .config import DEFAULT_COMPANY_LOOKUP_URL

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2


class CompanySuggestion(BaseModel):
    """One autocomplete result."""
    name: str
    domain: str
    logo: Optional[str] = None


_suggestions_adapter = TypeAdapter(List[CompanySuggestion])


class CompanyLookupClient:
    """Client for the external company suggestion API."""

    def __init__(self, base_url: str = DEFAULT_COMPANY_LOOKUP_URL, timeout: float = 5.0,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url
        self.timeout = timeout
        self.transport = transport

    async def suggest(self, query: str) -> List[CompanySuggestion]:
        """
        Fetch company suggestions for a partial name.

        Returns:
            Suggestions, or an empty list for short queries and on any failure
        """
        query = (query or "").strip()
        if len(query) < MIN_QUERY_LENGTH:
            return []

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.get(self.base_url, params={"query": query})
                response.raise_for_status()
                return _suggestions_adapter.validate_python(response.json())
            except httpx.TimeoutException:
                logger.warning(f"Company lookup timed out after {self.timeout}s")
            except httpx.HTTPStatusError as e:
                logger.warning(f"Company lookup error: {e.response.status_code}")
            except httpx.HTTPError as e:
                logger.warning(f"Company lookup failed: {e}")
            except ValueError as e:
                logger.warning(f"Invalid company lookup response: {e}")
        return []
