from contextlib import AsyncExitStack

from fastapi import Depends

from pokedex.cache import CacheFacade, build_cache_store
from pokedex.clients import PokeAPIClient, TranslationClient
from pokedex.config import Settings, get_settings
from pokedex.resilience import RetryPolicy
from pokedex.services import PokemonService, SpeciesLookupService, TranslationLookupService

# Shared, process-wide collaborators (connection pools). Created lazily.
_cache_facade = None
_poke_client = None
_translation_client = None


def get_cache_facade() -> CacheFacade:
    global _cache_facade
    if _cache_facade is None:
        _cache_facade = CacheFacade(build_cache_store(get_settings()))
    return _cache_facade


def get_poke_client() -> PokeAPIClient:
    global _poke_client
    if _poke_client is None:
        settings = get_settings()
        _poke_client = PokeAPIClient(
            base_url=settings.pokeapi_base_url,
            timeout=settings.http_timeout_seconds,
        )
    return _poke_client


def get_translation_client() -> TranslationClient:
    global _translation_client
    if _translation_client is None:
        settings = get_settings()
        _translation_client = TranslationClient(
            base_url=settings.translation_base_url,
            timeout=settings.http_timeout_seconds,
        )
    return _translation_client


def get_retry_policy(settings: Settings = Depends(get_settings)) -> RetryPolicy:
    return RetryPolicy.from_settings(settings)


def get_species_lookup(
    poke_client: PokeAPIClient = Depends(get_poke_client),
    cache: CacheFacade = Depends(get_cache_facade),
    retry_policy: RetryPolicy = Depends(get_retry_policy),
) -> SpeciesLookupService:
    return SpeciesLookupService(poke_client=poke_client, cache=cache, retry_policy=retry_policy)


def get_translation_lookup(
    translation_client: TranslationClient = Depends(get_translation_client),
    cache: CacheFacade = Depends(get_cache_facade),
    retry_policy: RetryPolicy = Depends(get_retry_policy),
) -> TranslationLookupService:
    return TranslationLookupService(
        translation_client=translation_client, cache=cache, retry_policy=retry_policy
    )


def get_pokemon_service(
    species_lookup: SpeciesLookupService = Depends(get_species_lookup),
    translation_lookup: TranslationLookupService = Depends(get_translation_lookup),
) -> PokemonService:
    return PokemonService(species_lookup=species_lookup, translation_lookup=translation_lookup)


async def close_clients():
    """Release connection pools (call on app shutdown). Every client is closed even if one fails."""
    global _cache_facade, _poke_client, _translation_client
    resources = (_poke_client, _translation_client, _cache_facade)
    _poke_client = _translation_client = _cache_facade = None

    async with AsyncExitStack() as stack:
        for resource in resources:
            if resource is not None:
                stack.push_async_callback(resource.close)
