"""Maps raw PokeAPI payloads to the reduced public schemas."""
import logging

from pydantic import ValidationError

from app.clients.pokeapi_client import MalformedUpstreamData
from app.models import PokemonData, PokemonResponse, PokemonTableEntry

logger = logging.getLogger(__name__)


def decode_pokemon(raw: dict) -> PokemonData:
    """Validates the fields we read from the upstream payload."""
    try:
        return PokemonData.model_validate(raw)
    except ValidationError as e:
        missing = ", ".join(".".join(str(part) for part in err["loc"]) for err in e.errors())
        logger.error(f"Unexpected PokeAPI payload, bad fields: {missing}")
        raise MalformedUpstreamData(missing)


def normalize_pokemon(raw: dict) -> PokemonResponse:
    """
    Reduces a PokeAPI payload to the public response.
    Height and weight come in decimetres/hectograms and are returned in metres/kilograms.
    """
    data = decode_pokemon(raw)

    return PokemonResponse(
        id=data.id,
        name=data.name,
        image=data.sprites.other.official_artwork.front_default,
        types=[slot.type.name for slot in data.types],  # upstream order is kept
        height=data.height / 10,
        weight=data.weight / 10,
        base_experience=data.base_experience,
    )


def to_table_entry(pokemon: PokemonResponse) -> PokemonTableEntry:
    return PokemonTableEntry(
        id=pokemon.id,
        name=pokemon.name,
        types=pokemon.types,
        height=pokemon.height,
    )
