"""Cache-aside lookups and the Pokemon orchestration service."""
from .pokemon_service import PokemonService, choose_translation_style
from .species_lookup import SpeciesLookupService
from .translation_lookup import TranslationLookupService

__all__ = [
    'PokemonService',
    'SpeciesLookupService',
    'TranslationLookupService',
    'choose_translation_style',
]
