from pokedex.models import (
    PokemonResponse,
    PokemonSpeciesData,
    TranslatedPokemonResponse,
    TranslationStyle,
)
from pokedex.services.species_lookup import SpeciesLookupService
from pokedex.services.translation_lookup import TranslationLookupService


def choose_translation_style(habitat: str | None, is_legendary: bool) -> TranslationStyle:
    """Rule: Legendary OR Habitat is 'cave' -> Yoda. Otherwise -> Shakespeare."""
    if habitat == "cave" or is_legendary:
        return TranslationStyle.YODA
    return TranslationStyle.SHAKESPEARE


class PokemonService:
    # Service requires both lookups via Dependency Injection
    def __init__(self, species_lookup: SpeciesLookupService, translation_lookup: TranslationLookupService):
        self._species_lookup = species_lookup
        self._translation_lookup = translation_lookup

    async def get_basic_info(self, name: str) -> PokemonResponse:
        """
        Endpoint 1: Fetches basic Pokemon data and maps to the response model.
        """
        species_data = await self._species_lookup.fetch(name)
        return PokemonResponse(**species_data.model_dump())

    async def get_translated_info(self, name: str) -> TranslatedPokemonResponse:
        """
        Endpoint 2: Fetches data and applies the translation rule.
        Falls back to the standard description when no translation is available.
        """
        species_data: PokemonSpeciesData = await self._species_lookup.fetch(name)

        translation_style = choose_translation_style(species_data.habitat, species_data.is_legendary)
        translation = await self._translation_lookup.translate(species_data.description, translation_style)

        description = translation.text if translation.available else species_data.description
        return TranslatedPokemonResponse(
            name=species_data.name,
            description=description,
            habitat=species_data.habitat,
            is_legendary=species_data.is_legendary,
        )
