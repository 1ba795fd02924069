"""Business logic on top of the PokeAPI client."""
from .pokemon_service import PokemonService
from .normalizer import normalize_pokemon, to_table_entry

__all__ = [
    'PokemonService',
    'normalize_pokemon',
    'to_table_entry',
]
