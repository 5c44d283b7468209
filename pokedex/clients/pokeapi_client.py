import logging

from pydantic import ValidationError

from pokedex.clients.base import UpstreamClient
from pokedex.models import PokeAPISpecies

logger = logging.getLogger(__name__)


class PokeAPIClient(UpstreamClient):
    BASE_URL = "https://pokeapi.co/api/v2/pokemon-species"
    SERVICE_NAME = "PokeAPI"

    def __init__(self, base_url: str = BASE_URL, timeout: float = 5.0):
        super().__init__(base_url=base_url, timeout=timeout)

    async def fetch_species(self, normalized_name: str) -> PokeAPISpecies:
        """Single network call for a species. Raises UpstreamError on any failure."""
        data = await self._request_json("GET", f"/{normalized_name}")
        try:
            return PokeAPISpecies.model_validate(data)
        except ValidationError as e:
            logger.error(f"PokeAPI payload for '{normalized_name}' failed validation: {e}")
            raise self._invalid_response() from e
