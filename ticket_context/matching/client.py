"""Client for the remote /match API."""

from typing import Any, Optional

import httpx
from pydantic import ValidationError
from rich.console import Console

from ticket_context.config import Settings
from ticket_context.models import EventContext, MatchRequest, MatchResponse

console = Console()


class MatchAPIError(Exception):
    """The /match call failed (HTTP error status or transport failure)."""

    def __init__(self, message: str, status_code: Optional[int] = None, payload: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload


class MatchClient:
    """POSTs extracted contexts to {api_base}/match."""

    def __init__(self, settings: Settings, transport: Optional[httpx.BaseTransport] = None):
        self.settings = settings
        self._client = httpx.Client(
            base_url=settings.api_base,
            timeout=settings.timeout,
            headers={"Content-Type": "application/json"},
            transport=transport,
        )

    def __enter__(self) -> "MatchClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def match(self, context: EventContext, page_url: Optional[str] = None) -> MatchResponse:
        """Look up offers comparable to the given context.

        Raises:
            MatchAPIError: on a non-2xx status or a network failure.
        """
        body = MatchRequest.from_context(context, page_url).model_dump()

        try:
            response = self._client.post("/match", json=body)
        except httpx.HTTPError as e:
            raise MatchAPIError(f"Network error: {e}") from e

        try:
            payload = response.json()
        except ValueError:
            payload = None

        if response.is_error:
            raise MatchAPIError(
                f"API error: {response.status_code}",
                status_code=response.status_code,
                payload=payload,
            )

        if not isinstance(payload, dict):
            console.print(f"[yellow]Unreadable /match payload (status {response.status_code})[/yellow]")
            return MatchResponse()

        try:
            return MatchResponse.model_validate(payload)
        except ValidationError as e:
            console.print(f"[yellow]Unexpected /match payload shape: {e.error_count()} errors[/yellow]")
            return MatchResponse()
