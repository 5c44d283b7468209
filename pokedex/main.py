import logging
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, HTTPException, Path, status

from pokedex.config import get_settings
from pokedex.dependencies import close_clients, get_pokemon_service
from pokedex.exceptions import PokemonNotFoundError, UpstreamError
from pokedex.models import PokemonResponse, TranslatedPokemonResponse
from pokedex.services import PokemonService

logger = logging.getLogger(__name__)

PokemonName = Annotated[
    str,
    Path(
        min_length=1,
        max_length=50,
        pattern=r"^[A-Za-z0-9-]+$",
        description="Pokemon name (letters, numbers and hyphens; case-insensitive)",
    ),
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(level=get_settings().log_level.upper())
    yield
    await close_clients()


app = FastAPI(
    title="Pokedex API",
    description="Pokemon species facade with fun translations, caching and retries.",
    lifespan=lifespan,
)


def _raise_for_lookup_error(e: Exception):
    if isinstance(e, PokemonNotFoundError):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    # Any other upstream failure (retries exhausted, 4xx, network) is a 503 for the API consumer.
    logger.error(f"Upstream failure: {e}")
    raise HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail=f"External API Error: {e.detail}",
    ) from e


@app.get("/health", summary="Liveness check")
async def health_check():
    return {"status": "healthy"}


# Endpoint 1: Basic Pokemon Info
@app.get(
    "/pokemon/{name}",
    response_model=PokemonResponse,
    summary="Returns basic Pokemon information",
)
async def get_pokemon_info(
    name: PokemonName,
    service: PokemonService = Depends(get_pokemon_service),
):
    """Fetches basic information (name, description, habitat, legendary status) for a given Pokemon name."""
    try:
        return await service.get_basic_info(name)
    except (PokemonNotFoundError, UpstreamError) as e:
        _raise_for_lookup_error(e)


# Endpoint 2: Translated Pokemon Info
@app.get(
    "/pokemon/translated/{name}",
    response_model=TranslatedPokemonResponse,
    summary="Returns Pokemon information with fun translation based on legendary/habitat status",
)
async def get_translated_pokemon_info(
    name: PokemonName,
    service: PokemonService = Depends(get_pokemon_service),
):
    """Applies the translation rule (Yoda for legendary/cave, Shakespeare otherwise).

    A failed translation is not an error: the standard description is returned instead.
    """
    try:
        return await service.get_translated_info(name)
    except (PokemonNotFoundError, UpstreamError) as e:
        _raise_for_lookup_error(e)
