from typing import ClassVar, Optional

from pydantic import BaseModel, ConfigDict, model_validator

from dsutil.app.core.errors import InvalidLocaleString, MissingLocaleComponent


class SystemLocale(BaseModel):
    """
    A language/country/variant triple, rendered as ``language_COUNTRY_variant``.

    Empty components are skipped when rendering, an empty language with a
    country still keeps its separator: ``SystemLocale("", "DE")`` is ``_DE``.
    """

    model_config = ConfigDict(frozen=True)

    US: ClassVar[str] = "en_US"
    UK: ClassVar[str] = "en_UK"
    GERMANY: ClassVar[str] = "de_DE"

    language: str = ""
    country: str = ""
    variant: str = ""

    def __init__(
        self,
        language: Optional[str] = None,
        country: Optional[str] = None,
        variant: Optional[str] = None,
    ):
        super().__init__(language=language or "", country=country or "", variant=variant or "")

    @model_validator(mode="after")
    def _require_language_or_country(self):
        if not self.language and not self.country:
            raise MissingLocaleComponent()
        return self

    @classmethod
    def create(cls, locale_string: str) -> "SystemLocale":
        """Parse ``language[_country[_variant]]``."""
        elements = locale_string.split("_")
        if not 1 <= len(elements) <= 3:
            raise InvalidLocaleString(locale_string)
        return cls(*elements)

    def to_string(self) -> str:
        string = self.language
        if self.country:
            string += "_" + self.country
        if self.variant:
            string += "_" + self.variant
        return string

    def equals(self, other: object) -> bool:
        return self.to_string() == str(other)

    def __str__(self) -> str:
        return self.to_string()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SystemLocale):
            return NotImplemented
        return self.equals(other)

    def __hash__(self) -> int:
        return hash(self.to_string())
