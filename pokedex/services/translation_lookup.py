import hashlib
import logging

from pokedex.cache import CacheFacade
from pokedex.clients.translation_client import TranslationClient
from pokedex.exceptions import UpstreamError
from pokedex.models import TranslationResult, TranslationStyle
from pokedex.resilience import RetryPolicy

logger = logging.getLogger(__name__)

# Translations are deterministic: cache without expiry
TRANSLATION_CACHE_TTL = 0


def translation_cache_key(text: str, style: TranslationStyle) -> str:
    # Hashing bounds the key length for long descriptions
    digest = hashlib.sha256(text.encode("utf-8")).hexdigest()
    return f"translation:{style.value}:{digest}"


class TranslationLookupService:
    """
    Cache-aside lookup of fun translations.

    The translation API is heavily rate limited, so failures are an expected
    outcome: they come back as TranslationResult.unavailable(), never as
    exceptions. Callers fall back to the original text.
    """

    def __init__(self, translation_client: TranslationClient, cache: CacheFacade, retry_policy: RetryPolicy):
        self._translation_client = translation_client
        self._cache = cache
        self._retry_policy = retry_policy

    async def translate(self, text: str, style: TranslationStyle) -> TranslationResult:
        cache_key = translation_cache_key(text, style)

        cached = await self._cache.get(cache_key)
        if isinstance(cached, str):
            logger.info(f"Cache hit for: {text[:30]}...")
            return TranslationResult.translated(cached)

        logger.info(f"Cache miss for: {text[:30]}...")
        try:
            translated = await self._retry_policy.execute(
                lambda: self._translation_client.translate(text, style),
                context=f"Translation API request ({style.value})",
            )
        except UpstreamError as e:
            logger.warning(f"Translation failed for style '{style.value}': {e.detail}")
            return TranslationResult.unavailable()
        except Exception:
            logger.exception(f"Unexpected error while translating with style '{style.value}'")
            return TranslationResult.unavailable()

        await self._cache.set(cache_key, translated, ttl=TRANSLATION_CACHE_TTL)
        return TranslationResult.translated(translated)
