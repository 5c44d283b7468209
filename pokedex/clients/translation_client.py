from pydantic import ValidationError

from pokedex.clients.base import UpstreamClient
from pokedex.models import FunTranslationsResponse, TranslationStyle


class TranslationClient(UpstreamClient):
    BASE_URL = "https://api.funtranslations.com/translate"
    SERVICE_NAME = "Translation API"

    def __init__(self, base_url: str = BASE_URL, timeout: float = 5.0):
        super().__init__(base_url=base_url, timeout=timeout)

    async def translate(self, text: str, style: TranslationStyle) -> str:
        """Performs the actual network call. Raises UpstreamError on any failure."""
        data = await self._request_json("POST", f"/{style.value}", json={"text": text})
        try:
            return FunTranslationsResponse.model_validate(data).contents.translated
        except ValidationError as e:
            raise self._invalid_response() from e
