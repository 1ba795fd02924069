import asyncio
import logging
import random
import re

from app.clients.pokeapi_client import PokeAPIClient, APIClientError
from app.config import Settings
from app.models import BatchItemError, PokemonResponse, PokemonTableEntry
from app.services.normalizer import normalize_pokemon, to_table_entry

logger = logging.getLogger(__name__)

# Leading integer, like "12", " +7" or "3abc"
_LEADING_INT = re.compile(r"\s*([+-]?)(\d+)")


class PokemonService:
    # Client and settings are injected, so tests can swap in mocks
    def __init__(self, poke_client: PokeAPIClient, settings: Settings, rng: random.Random | None = None):
        self._poke_client = poke_client
        self._settings = settings
        self._rng = rng or random.Random()

    def random_id(self) -> int:
        return self._rng.randint(1, self._settings.MAX_POKEMON_ID)

    def parse_count(self, raw: str | None) -> int:
        """
        Parses the list size from the path.
        Missing, unparsable or non-positive values fall back to the default;
        values above the cap are clamped.
        """
        match = _LEADING_INT.match(raw) if raw is not None else None
        if not match or match.group(1) == "-":
            return self._settings.DEFAULT_BATCH_COUNT

        digits = match.group(2).lstrip("0")
        if not digits:
            return self._settings.DEFAULT_BATCH_COUNT

        # Compare lengths first, int() refuses very long digit strings
        max_count = self._settings.MAX_BATCH_COUNT
        if len(digits) > len(str(max_count)) or int(digits) > max_count:
            logger.warning(f"Requested {digits[:20]} Pokemon, clamping to {max_count}")
            return max_count
        return int(digits)

    async def get_pokemon(self, pokemon_id: int | str) -> PokemonResponse:
        """Fetches one Pokemon by id (used verbatim) and maps it to the public response."""
        raw = await self._poke_client.fetch_pokemon(pokemon_id)
        return normalize_pokemon(raw)

    async def get_random_pokemon(self) -> PokemonResponse:
        return await self.get_pokemon(self.random_id())

    async def get_random_batch(self, count: int) -> list[PokemonTableEntry | BatchItemError]:
        """
        Fetches `count` random Pokemon concurrently and waits for all of them.

        Results keep the order the ids were generated in. With the "fail" policy a
        single failure fails the whole batch; with "partial" each failed item is
        replaced by a BatchItemError at its position.
        """
        pokemon_ids = [self.random_id() for _ in range(count)]
        logger.info(f"Fetching batch of {count} Pokemon: {pokemon_ids}")

        # return_exceptions=True: every fetch settles before we look at the results
        results = await asyncio.gather(
            *(self.get_pokemon(pokemon_id) for pokemon_id in pokemon_ids),
            return_exceptions=True,
        )

        failures = [r for r in results if isinstance(r, BaseException)]
        if failures:
            logger.error(f"{len(failures)} of {count} fetches failed in batch")
            if self._settings.BATCH_FAILURE_POLICY == "fail":
                raise failures[0]

        batch: list[PokemonTableEntry | BatchItemError] = []
        for pokemon_id, result in zip(pokemon_ids, results):
            if isinstance(result, APIClientError):
                batch.append(BatchItemError(id=pokemon_id, error=result.detail))
            elif isinstance(result, BaseException):
                raise result
            else:
                batch.append(to_table_entry(result))
        return batch
