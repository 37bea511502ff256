"""
Error classes raised by the data source and locale helpers.

Every error keeps the offending input in ``data`` so callers can report it.
None of them derive from ValueError: pydantic would otherwise wrap them into
a ValidationError when raised from a validator.
"""

from typing import Any, Dict, Iterable, Optional


class UtilError(Exception):
    """Base error class for all dsutil errors."""

    def __init__(self, message: str, data: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.data = data or {}


# Data source errors
class DataSourceError(UtilError):
    """Error while building a data source descriptor."""
    pass


class InvalidConnectionType(DataSourceError):
    def __init__(self, value: Any, allowed: Iterable[str]):
        self.value = value
        self.allowed = list(allowed)
        super().__init__(
            f"Invalid connection type {value} specified, use one of {', '.join(self.allowed)}",
            data={"value": value, "allowed": self.allowed},
        )


class InvalidPort(DataSourceError):
    def __init__(self, value: Any):
        self.value = value
        super().__init__(f"Invalid port {value!r} specified, a number is required", data={"value": value})


class DescriptorNotReadable(DataSourceError):
    def __init__(self, descriptor: Any, reason: Optional[str] = None):
        self.descriptor = str(descriptor)
        message = f"The descriptor file {descriptor} can not be opened"
        if reason:
            message += f": {reason}"
        super().__init__(message, data={"descriptor": self.descriptor})


class DataSourceNotFound(DataSourceError):
    def __init__(self, name: str, descriptor: Any):
        self.name = name
        self.descriptor = str(descriptor)
        super().__init__(
            f"The datasource {name} is not defined in descriptor file {descriptor}",
            data={"name": name, "descriptor": self.descriptor},
        )


# Locale errors
class LocaleError(UtilError):
    """Error while building, reading or activating a system locale."""
    pass


class MissingLocaleComponent(LocaleError):
    def __init__(self):
        super().__init__("Either language or country must have a value")


class InvalidLocaleString(LocaleError):
    def __init__(self, value: str):
        self.value = value
        super().__init__(
            f"Locale string {value!r} must have one to three '_' separated parts",
            data={"value": value},
        )


class LocaleListingFailed(LocaleError):
    def __init__(self, command: Iterable[str], reason: Optional[str] = None):
        self.command = " ".join(command)
        message = f"Installed locales can't be listed with {self.command}"
        if reason:
            message += f": {reason}"
        super().__init__(message, data={"command": self.command})


class LocaleNotInstalled(LocaleError):
    def __init__(self, locale: Any):
        self.locale = str(locale)
        super().__init__(f"System locale {locale} is not installed", data={"locale": self.locale})


class LocaleActivationFailed(LocaleError):
    def __init__(self, locale: Any, reason: Optional[str] = None):
        self.locale = str(locale)
        message = f"Default locale can't be set to {locale}"
        if reason:
            message += f": {reason}"
        super().__init__(message, data={"locale": self.locale})


class NoDefaultLocale(LocaleError):
    def __init__(self):
        super().__init__("No system locale set")
