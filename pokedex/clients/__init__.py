"""Client modules for external API communication."""
from .base import UpstreamClient
from .pokeapi_client import PokeAPIClient
from .translation_client import TranslationClient

__all__ = [
    'PokeAPIClient',
    'TranslationClient',
    'UpstreamClient',
]
