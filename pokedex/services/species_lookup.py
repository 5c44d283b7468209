import logging

from pydantic import ValidationError

from pokedex.cache import CacheFacade
from pokedex.clients.pokeapi_client import PokeAPIClient
from pokedex.exceptions import PokemonNotFoundError, UpstreamError, UpstreamErrorKind
from pokedex.models import FlavorTextEntry, PokeAPISpecies, PokemonSpeciesData
from pokedex.resilience import RetryPolicy

logger = logging.getLogger(__name__)

NO_DESCRIPTION = "No description available."

# Species data never changes upstream: cache without expiry
SPECIES_CACHE_TTL = 0


def species_cache_key(name: str) -> str:
    return f"species:{name.lower()}"


def extract_english_description(entries: list[FlavorTextEntry]) -> str:
    """First English flavor text, with newlines/form feeds turned into spaces."""
    return next(
        (
            entry.flavor_text.replace("\n", " ").replace("\f", " ")
            for entry in entries
            if entry.language.name == "en"
        ),
        NO_DESCRIPTION,
    )


def to_species_data(payload: PokeAPISpecies) -> PokemonSpeciesData:
    return PokemonSpeciesData(
        name=payload.name,
        description=extract_english_description(payload.flavor_text_entries),
        habitat=payload.habitat.name if payload.habitat else None,
        is_legendary=payload.is_legendary,
    )


class SpeciesLookupService:
    """
    Cache-aside lookup of species data: cache first, PokeAPI (with retries)
    on a miss, then a best-effort cache write.

    Concurrent misses for the same name may both reach PokeAPI and both write
    the cache; the writes carry equal values, so the race is harmless.
    """

    def __init__(self, poke_client: PokeAPIClient, cache: CacheFacade, retry_policy: RetryPolicy):
        self._poke_client = poke_client
        self._cache = cache
        self._retry_policy = retry_policy

    async def fetch(self, name: str) -> PokemonSpeciesData:
        normalized_name = name.lower()
        cache_key = species_cache_key(normalized_name)

        cached = await self._cache.get(cache_key)
        if cached is not None:
            try:
                species = PokemonSpeciesData.model_validate(cached)
                logger.info(f"Cache hit for Pokemon: {normalized_name}")
                return species
            except ValidationError:
                logger.warning(f"Discarding malformed cache entry {cache_key}")

        logger.info(f"Cache miss for Pokemon: {normalized_name}")
        try:
            payload = await self._retry_policy.execute(
                lambda: self._poke_client.fetch_species(normalized_name),
                context=f"PokeAPI request for '{normalized_name}'",
            )
        except UpstreamError as e:
            if e.kind is UpstreamErrorKind.NOT_FOUND:
                raise PokemonNotFoundError(name) from e
            raise

        species = to_species_data(payload)
        # Only successful results get cached
        await self._cache.set(cache_key, species.model_dump(), ttl=SPECIES_CACHE_TTL)
        return species
