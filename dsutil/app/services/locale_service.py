"""
Host locale lookup and activation.

The process-wide locale is reached through a ``LocaleProvider`` so tests and
callers can swap in their own. ``SystemLocaleProvider`` talks to the host:
it lists installed locales with ``locale -a`` and reads/sets the active one
with ``locale.setlocale``. Changing the process locale is not thread safe,
callers running several threads have to serialize ``set_default`` themselves.
"""

import locale
import logging
import subprocess
from typing import List, Optional, Protocol

from dsutil.app.core.config import settings
from dsutil.app.core.errors import (
    LocaleActivationFailed,
    LocaleError,
    LocaleListingFailed,
    LocaleNotInstalled,
    NoDefaultLocale,
)
from dsutil.app.models.locale import SystemLocale

logger = logging.getLogger(__name__)


class LocaleProvider(Protocol):
    def installed(self) -> List[str]:
        """Identifiers of every locale installed on the host."""
        ...

    def current(self) -> Optional[str]:
        """Identifier of the active locale, None if there is none."""
        ...

    def activate(self, name: str) -> bool:
        """Make ``name`` the active locale, False if the host refuses."""
        ...


class SystemLocaleProvider:
    def __init__(self, command: Optional[List[str]] = None, category: int = locale.LC_ALL):
        self.command = command or settings.locale_list_command()
        self.category = category

    def installed(self) -> List[str]:
        logger.debug(f"Executing: {' '.join(self.command)}")
        try:
            result = subprocess.run(self.command, capture_output=True, text=True, check=True)
        except subprocess.CalledProcessError as e:
            raise LocaleListingFailed(self.command, (e.stderr or "").strip() or f"exit status {e.returncode}") from e
        except OSError as e:
            raise LocaleListingFailed(self.command, str(e)) from e
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]

    def current(self) -> Optional[str]:
        return locale.setlocale(self.category, None) or None

    def activate(self, name: str) -> bool:
        try:
            locale.setlocale(self.category, name)
        except locale.Error as e:
            logger.warning(f"Host rejected locale {name}: {e}")
            return False
        return True


def _provider(provider: Optional[LocaleProvider]) -> LocaleProvider:
    return provider if provider is not None else SystemLocaleProvider()


def available_locales(provider: Optional[LocaleProvider] = None) -> List[SystemLocale]:
    locales = []
    for identifier in _provider(provider).installed():
        try:
            locales.append(SystemLocale.create(identifier))
        except LocaleError as e:
            logger.debug(f"Skipping installed locale {identifier!r}: {e.message}")
    return locales


def set_default(new_locale: SystemLocale, provider: Optional[LocaleProvider] = None) -> None:
    provider = _provider(provider)
    wanted = str(new_locale)
    if not any(str(installed) == wanted for installed in available_locales(provider)):
        raise LocaleNotInstalled(new_locale)
    if not provider.activate(wanted):
        raise LocaleActivationFailed(new_locale)
    logger.info(f"Default locale set to {wanted}")


def get_default(provider: Optional[LocaleProvider] = None) -> SystemLocale:
    current = _provider(provider).current()
    if not current:
        raise NoDefaultLocale()
    # Only language, country and variant are used
    language, country, variant = (current.split("_") + ["", ""])[:3]
    return SystemLocale(language, country, variant)
