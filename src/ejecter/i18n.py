"""
Message catalogue for the texts shown in desktop notifications.

Catalogues are looked up under the gettext domain ``ejecter``; without one
the English msgids are shown as they are.
"""

import gettext
from pathlib import Path
from typing import List, Optional

DOMAIN = "ejecter"
SYSTEM_LOCALE_DIR = Path("/usr/share/locale")
SOURCE_LOCALE_DIR = Path(__file__).resolve().parents[2] / "locale"

_translations: Optional[gettext.NullTranslations] = None


def locale_dirs() -> List[Path]:
    """Catalogue directories; a source checkout's ``locale/`` comes first."""
    return [d for d in (SOURCE_LOCALE_DIR, SYSTEM_LOCALE_DIR) if d.is_dir()]


def setup_i18n(locale: Optional[str] = None) -> gettext.NullTranslations:
    """
    Load the catalogue for ``locale`` (e.g. ``'de_DE'``), or for the
    environment's language when ``locale`` is None.
    """
    global _translations

    languages = [locale] if locale else None
    for localedir in locale_dirs():
        try:
            _translations = gettext.translation(DOMAIN, localedir=str(localedir), languages=languages)
            break
        except OSError:
            continue
    else:
        _translations = gettext.NullTranslations()
    return _translations


def _(message: str) -> str:
    """
    Translate a notification text.

        >>> from ejecter.i18n import _
        >>> _("It is now safe to remove the device")
    """
    translations = _translations if _translations is not None else setup_i18n()
    return translations.gettext(message)


setup_i18n()
