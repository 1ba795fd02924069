import httpx
import logging
from fastapi import HTTPException

logger = logging.getLogger(__name__)

# Base class for every failure coming from the upstream API
class APIClientError(HTTPException):
    def __init__(self, status_code: int, detail: str):
        super().__init__(status_code=status_code, detail=f"External API Error: {detail}")

class PokemonNotFoundError(APIClientError):
    def __init__(self, pokemon_id):
        super().__init__(status_code=404, detail=f"Pokemon '{pokemon_id}' not found.")

# Transport failures, upstream 5xx and unreadable bodies
class UpstreamError(APIClientError):
    def __init__(self, detail: str):
        super().__init__(status_code=500, detail=detail)

# The payload decoded as JSON but lacks a field we need
class MalformedUpstreamData(APIClientError):
    def __init__(self, detail: str):
        super().__init__(status_code=500, detail=f"Malformed PokeAPI payload: {detail}")


class PokeAPIClient:
    BASE_URL = "https://pokeapi.co/api/v2/pokemon"

    def __init__(self, base_url: str = BASE_URL, timeout: float = 5.0, max_connections: int = 20):
        self.client = httpx.AsyncClient(
            base_url=base_url,
            # No pool timeout: fetches beyond the connection cap queue for a free slot
            timeout=httpx.Timeout(timeout, pool=None),
            limits=httpx.Limits(max_connections=max_connections),
        )

    @classmethod
    def from_settings(cls, settings) -> "PokeAPIClient":
        return cls(
            base_url=settings.POKEAPI_URL,
            timeout=settings.UPSTREAM_TIMEOUT,
            max_connections=settings.MAX_UPSTREAM_CONNECTIONS,
        )

    async def fetch_pokemon(self, pokemon_id: int | str) -> dict:
        """Fetches the raw PokeAPI payload for one Pokemon. The id is used verbatim."""
        url = f"/{pokemon_id}"

        try:
            response = await self.client.get(url)
            response.raise_for_status()  # Raises for 4xx/5xx status codes
            return response.json()

        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            logger.error(f"PokeAPI returned {status_code} for Pokemon '{pokemon_id}'")
            if status_code < 500:
                raise PokemonNotFoundError(pokemon_id)
            raise UpstreamError(f"PokeAPI failed with status {status_code}")
        except httpx.RequestError as e:
            # Network failures/timeouts
            logger.error(f"PokeAPI network error for Pokemon '{pokemon_id}': {e!r}")
            raise UpstreamError(f"PokeAPI network error: {str(e)}")
        except ValueError as e:
            # Body was not JSON
            logger.error(f"PokeAPI returned invalid JSON for Pokemon '{pokemon_id}'")
            raise UpstreamError(f"PokeAPI returned an unreadable response: {str(e)}")

    async def close(self):
        """Close the HTTP connection pool (call on app shutdown)."""
        await self.client.aclose()
