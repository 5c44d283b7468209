import json
import pytest
import httpx
from pokedex.clients.translation_client import TranslationClient
from pokedex.exceptions import UpstreamError, UpstreamErrorKind
from pokedex.models import TranslationStyle


MOCK_TRANSLATION_SUCCESS = {
    "success": {"total": 1},
    "contents": {
        "translated": "Yoda speaks, you listen.",
        "text": "You listen to Yoda speak.",
        "translation": "yoda"
    }
}


@pytest.fixture
def translation_client():
    return TranslationClient()


@pytest.mark.asyncio
async def test_successful_yoda_translation(httpx_mock, translation_client):
    """Verifies the POST body and extraction of the translated text."""
    httpx_mock.add_response(
        url="https://api.funtranslations.com/translate/yoda",
        method="POST",
        json=MOCK_TRANSLATION_SUCCESS,
    )

    result = await translation_client.translate("You listen to Yoda speak.", TranslationStyle.YODA)

    assert result == "Yoda speaks, you listen."
    request = httpx_mock.get_requests()[0]
    assert json.loads(request.content) == {"text": "You listen to Yoda speak."}


@pytest.mark.asyncio
async def test_style_selects_endpoint(httpx_mock, translation_client):
    httpx_mock.add_response(
        url="https://api.funtranslations.com/translate/shakespeare",
        method="POST",
        json={"contents": {"translated": "Hark!"}},
    )

    assert await translation_client.translate("Hello.", TranslationStyle.SHAKESPEARE) == "Hark!"


@pytest.mark.asyncio
async def test_api_rate_limit_is_classified(httpx_mock, translation_client):
    """A 429 keeps its status so the retry policy can act on it."""
    httpx_mock.add_response(
        url="https://api.funtranslations.com/translate/shakespeare",
        status_code=429,
        json={"error": {"code": 429, "message": "Too Many Requests"}}
    )

    with pytest.raises(UpstreamError) as excinfo:
        await translation_client.translate("To be or not to be.", TranslationStyle.SHAKESPEARE)

    assert excinfo.value.kind is UpstreamErrorKind.RATE_LIMITED
    assert excinfo.value.status_code == 429
    assert "rate limit" in excinfo.value.detail.lower()


@pytest.mark.asyncio
async def test_api_network_error(httpx_mock, translation_client):
    """A network failure (timeout, DNS error) becomes a NETWORK_ERROR."""
    httpx_mock.add_exception(
        httpx.ConnectError("Connection timed out."),
        url="https://api.funtranslations.com/translate/yoda"
    )

    with pytest.raises(UpstreamError) as excinfo:
        await translation_client.translate("Test.", TranslationStyle.YODA)

    assert excinfo.value.kind is UpstreamErrorKind.NETWORK_ERROR
    assert "network error" in excinfo.value.detail.lower()


@pytest.mark.asyncio
async def test_unexpected_response_shape(httpx_mock, translation_client):
    httpx_mock.add_response(
        url="https://api.funtranslations.com/translate/yoda",
        json={"success": {"total": 1}},
    )

    with pytest.raises(UpstreamError) as excinfo:
        await translation_client.translate("Test.", TranslationStyle.YODA)

    assert excinfo.value.kind is UpstreamErrorKind.INVALID_RESPONSE
