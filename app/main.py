import logging
import time
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import APIRouter, Depends, FastAPI, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from app.clients import APIClientError
from app.config import Settings, settings as default_settings
from app.dependencies import get_pokemon_service
from app.models import (
    BatchItemError,
    ErrorResponse,
    HealthResponse,
    PokemonResponse,
    PokemonTableEntry,
)
from app.services.pokemon_service import PokemonService

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if default_settings.DEBUG else logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)

FETCH_ERROR = "Failed to fetch Pokémon"
LIST_ERROR = "Failed to fetch Pokémon list"
NOT_FOUND_ERROR = "Pokémon not found"

router = APIRouter(prefix="/api")


def _error_response(exc: Exception, message: str, not_found_message: str | None = None) -> JSONResponse:
    """Turns a failure into the public {"error": ...} body."""
    if isinstance(exc, APIClientError):
        logger.error(f"{message}: {exc.detail}")
        if exc.status_code == status.HTTP_404_NOT_FOUND and not_found_message:
            return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": not_found_message})
    else:
        logger.exception(f"{message}: unexpected error")
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": message})


# Endpoint 1: Random Pokemon
@router.get(
    "/pokemon/random",
    response_model=PokemonResponse,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Returns a random Pokemon",
)
async def get_random_pokemon(service: PokemonService = Depends(get_pokemon_service)):
    """Picks a random id in the first generation and returns its reduced info."""
    try:
        return await service.get_random_pokemon()
    except Exception as e:
        return _error_response(e, FETCH_ERROR, NOT_FOUND_ERROR)


# Endpoint 2: Random batch for the table view
# Registered before /pokemon/{pokemon_id} so "list" is not taken as an id
async def _pokemon_list_response(service: PokemonService, count: str | None):
    try:
        return await service.get_random_batch(service.parse_count(count))
    except Exception as e:
        return _error_response(e, LIST_ERROR)


@router.get(
    "/pokemon/list",
    response_model=list[PokemonTableEntry | BatchItemError],
    responses={500: {"model": ErrorResponse}},
    summary="Returns a default-sized list of random Pokemon",
)
async def get_default_pokemon_list(service: PokemonService = Depends(get_pokemon_service)):
    return await _pokemon_list_response(service, None)


@router.get(
    "/pokemon/list/{count}",
    response_model=list[PokemonTableEntry | BatchItemError],
    responses={500: {"model": ErrorResponse}},
    summary="Returns a list of random Pokemon",
)
async def get_pokemon_list(
    count: str,
    service: PokemonService = Depends(get_pokemon_service),
):
    """Fetches `count` random Pokemon concurrently (default 5, capped by MAX_BATCH_COUNT)."""
    return await _pokemon_list_response(service, count)


# Endpoint 3: Pokemon by id
@router.get(
    "/pokemon/{pokemon_id}",
    response_model=PokemonResponse,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Returns a Pokemon by id",
)
async def get_pokemon_by_id(
    pokemon_id: str,
    service: PokemonService = Depends(get_pokemon_service),
):
    """The id is forwarded to PokeAPI as given."""
    try:
        return await service.get_pokemon(pokemon_id)
    except Exception as e:
        return _error_response(e, FETCH_ERROR, NOT_FOUND_ERROR)


@router.get("/health", response_model=HealthResponse, summary="Health check")
async def health():
    return HealthResponse(status="Server is running!")


def create_app(settings: Settings = default_settings) -> FastAPI:
    """Builds the application for the given settings."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        base_url = f"http://{settings.HOST}:{settings.PORT}"
        logger.info(f"Backend server running on {base_url}")
        logger.info(f"API endpoints available at {base_url}/api/")
        yield
        if app.state.poke_client is not None:
            await app.state.poke_client.close()

    app = FastAPI(
        title="Random Pokedex API",
        description="Proxies PokeAPI and returns a reduced Pokemon schema.",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.poke_client = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    # Request logging
    @app.middleware("http")
    async def log_requests(request: Request, call_next) -> Response:
        start = time.perf_counter()
        response: Response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "%s %s -> %s (%.1fms)",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
        )
        return response

    app.include_router(router)

    # Static frontend last, so /api routes win
    if settings.FRONTEND_DIR and Path(settings.FRONTEND_DIR).is_dir():
        app.mount("/", StaticFiles(directory=settings.FRONTEND_DIR, html=True), name="frontend")
    else:
        logger.warning(f"Frontend directory '{settings.FRONTEND_DIR}' not found, serving API only")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host=default_settings.HOST, port=default_settings.PORT)
