from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class TranslationStyle(str, Enum):
    SHAKESPEARE = "shakespeare"
    YODA = "yoda"


# --- Upstream payloads (only the fields we read) ---

class NamedResource(BaseModel):
    name: str


class FlavorTextEntry(BaseModel):
    flavor_text: str
    language: NamedResource


class PokeAPISpecies(BaseModel):
    name: str
    is_legendary: bool
    habitat: NamedResource | None = None
    flavor_text_entries: list[FlavorTextEntry] = Field(default_factory=list)


class TranslationContents(BaseModel):
    translated: str


class FunTranslationsResponse(BaseModel):
    contents: TranslationContents


# --- Internal contracts ---

class PokemonSpeciesData(BaseModel):
    """Normalized species record. Immutable once built, cached indefinitely."""
    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    habitat: str | None
    is_legendary: bool


class TranslationResult(BaseModel):
    """Either a translated text or an explicit "no translation available" marker."""
    model_config = ConfigDict(frozen=True)

    text: str | None = None

    @classmethod
    def translated(cls, text: str) -> "TranslationResult":
        return cls(text=text)

    @classmethod
    def unavailable(cls) -> "TranslationResult":
        return cls(text=None)

    @property
    def available(self) -> bool:
        return self.text is not None


# Model for the final, basic API response (Public Endpoint 1)
class PokemonResponse(BaseModel):
    name: str
    description: str
    habitat: str | None
    is_legendary: bool


# Model for the final, translated API response (Public Endpoint 2)
class TranslatedPokemonResponse(PokemonResponse):
    pass
