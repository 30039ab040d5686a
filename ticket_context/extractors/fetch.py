"""HTTP page fetcher for the CLI.

The extraction engine itself never touches the network; this module only
exists so `ticket-context extract https://...` can snapshot a live page.
"""

import asyncio
import random
from typing import Optional

import httpx
from rich.console import Console

console = Console()

# Realistic Firefox User-Agents
USER_AGENTS = [
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:134.0) Gecko/20100101 Firefox/134.0",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 14.7; rv:134.0) Gecko/20100101 Firefox/134.0",
    "Mozilla/5.0 (X11; Linux x86_64; rv:134.0) Gecko/20100101 Firefox/134.0",
]


class FetchResult:
    """Result of a page fetch with error details."""

    def __init__(
        self,
        html: Optional[str] = None,
        url: Optional[str] = None,
        status: Optional[int] = None,
        error: Optional[str] = None,
    ):
        self.html = html
        self.url = url  # Final URL after redirects
        self.status = status
        self.error = error  # "timeout", "connection", "403", ...

    @property
    def ok(self) -> bool:
        return self.html is not None


async def fetch_page(
    url: str,
    timeout: float = 30.0,
    retries: int = 3,
) -> FetchResult:
    """Fetch a page with httpx, retrying with backoff on transient errors."""
    headers = {
        "User-Agent": random.choice(USER_AGENTS),
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.9",
    }

    last_error = None
    last_status = None
    for attempt in range(retries):
        try:
            async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as client:
                response = await client.get(url, headers=headers)
                last_status = response.status_code
                response.raise_for_status()
                return FetchResult(
                    html=response.text,
                    url=str(response.url),
                    status=response.status_code,
                )

        except httpx.TimeoutException:
            last_error = "timeout"
        except httpx.HTTPStatusError as e:
            last_status = e.response.status_code
            last_error = str(e.response.status_code)
            if e.response.status_code in (403, 429):
                await asyncio.sleep(2 ** attempt)
        except httpx.ConnectError:
            last_error = "connection"
        except httpx.HTTPError as e:
            last_error = type(e).__name__.lower()

        if attempt < retries - 1:
            await asyncio.sleep(0.5 * (2 ** attempt))

    console.print(f"[dim]Fetch failed for {url}: {last_error}[/dim]")
    return FetchResult(url=url, status=last_status, error=last_error)
