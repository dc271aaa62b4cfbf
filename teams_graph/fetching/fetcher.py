from typing import List, Optional

import httpx
from loguru import logger

GITHUB_ACCEPT_HEADER = "application/vnd.github.v3+json"


class FetchError(Exception):
    """Base exception for failed GitHub API requests."""

    def __init__(self, message: str, url: str):
        self.url = url
        super().__init__(message)


class RequestConstructionError(FetchError):
    """Exception raised when a request cannot be built (malformed URL)."""

    pass


class NetworkError(FetchError):
    """Exception raised when the round trip fails (connect, DNS, TLS, timeout)."""

    pass


class BodyReadError(FetchError):
    """Exception raised when the response body cannot be fully read."""

    pass


class UnexpectedStatusError(FetchError):
    """Exception raised for non-2xx responses."""

    def __init__(self, message: str, url: str, status_code: int):
        self.status_code = status_code
        super().__init__(message, url)


class AuthenticationError(UnexpectedStatusError):
    """Exception raised for authentication failures (401, 403)."""

    pass


class GitHubFetcher:
    """Issues authenticated GET requests against the GitHub REST API."""

    def __init__(
        self,
        token: str,
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            follow_redirects=True,
        )
        # Set the auth headers for all requests made by this fetcher instance
        self.client.headers.update(
            {
                "Accept": GITHUB_ACCEPT_HEADER,
                "Authorization": f"token {token}",
            }
        )

    async def __aenter__(self) -> "GitHubFetcher":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def fetch(self, url: str) -> bytes:
        """Returns the raw body of a single GET request to ``url``."""
        response = await self._make_request(url)
        return response.content

    async def fetch_pages(self, url: str, follow_next: bool = True) -> List[bytes]:
        """Returns the bodies of ``url`` and, optionally, every following page.

        Pages are discovered through the ``Link: <...>; rel="next"`` header.
        """
        bodies: List[bytes] = []
        next_url: Optional[str] = url
        while next_url:
            response = await self._make_request(next_url)
            bodies.append(response.content)
            next_url = response.links.get("next", {}).get("url")
            if next_url and not follow_next:
                logger.warning(
                    f"Response for {url} has more pages; only the first page is used."
                )
                break
        return bodies

    async def _make_request(self, url: str) -> httpx.Response:
        """Sends a GET request and reads the body, mapping httpx failures."""
        logger.debug(f"Making request to {url}")
        try:
            request = self.client.build_request("GET", url)
        except httpx.InvalidURL as e:
            raise RequestConstructionError(
                f"Error constructing request for url '{url}': {e}", url
            ) from e

        try:
            response = await self.client.send(request, stream=True)
        except httpx.UnsupportedProtocol as e:
            raise RequestConstructionError(
                f"Error constructing request for url '{url}': {e}", url
            ) from e
        except httpx.RequestError as e:
            raise NetworkError(f"Error fetching url '{url}': {e}", url) from e

        try:
            await response.aread()
        except (httpx.RequestError, httpx.StreamError) as e:
            raise BodyReadError(
                f"Error reading response bytes for url '{url}': {e}", url
            ) from e
        finally:
            await response.aclose()

        if response.status_code in {401, 403}:
            logger.warning(
                f"Authentication error ({response.status_code}) at {url}. Check GITHUB_TOKEN."
            )
            raise AuthenticationError(
                f"Authentication failed ({response.status_code}) for url '{url}'",
                url,
                response.status_code,
            )
        if not response.is_success:
            raise UnexpectedStatusError(
                f"Unexpected status {response.status_code} for url '{url}'",
                url,
                response.status_code,
            )

        logger.debug(f"Request successful: {response.status_code} for {url}")
        return response

    async def close(self) -> None:
        """Closes the underlying HTTP client if this fetcher created it."""
        if self._owns_client:
            await self.client.aclose()
            logger.debug("Closed GitHub HTTP client")
