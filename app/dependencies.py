from app.clients import PokeAPIClient
from app.config import Settings
from app.services import PokemonService
from fastapi import Depends, Request

# Settings and the pooled client live on app.state, set up by create_app()

def get_settings(request: Request) -> Settings:
    return request.app.state.settings

def get_poke_client(request: Request) -> PokeAPIClient:
    if request.app.state.poke_client is None:
        request.app.state.poke_client = PokeAPIClient.from_settings(request.app.state.settings)
    return request.app.state.poke_client

def get_pokemon_service(
    poke_client: PokeAPIClient = Depends(get_poke_client),
    settings: Settings = Depends(get_settings),
) -> PokemonService:
    return PokemonService(poke_client=poke_client, settings=settings)
