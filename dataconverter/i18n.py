"""
Locale configuration and negotiation.

Picks a supported locale from an Accept-Language header and decides
whether an unlocalized request path needs a redirect.
"""

import re
from typing import Optional

LOCALES = ("en", "fr", "es", "de", "pt", "it", "nl", "sv", "da", "no", "fi", "pl", "tr", "id")
DEFAULT_LOCALE = "en"

LOCALE_NAMES = {
    "en": "English",
    "fr": "Français",
    "es": "Español",
    "de": "Deutsch",
    "pt": "Português",
    "it": "Italiano",
    "nl": "Nederlands",
    "sv": "Svenska",
    "da": "Dansk",
    "no": "Norsk",
    "fi": "Suomi",
    "pl": "Polski",
    "tr": "Türkçe",
    "id": "Indonesia",
}

# Value for the <html lang> attribute
LOCALE_HTML_LANG = {locale: locale for locale in LOCALES}
LOCALE_HTML_LANG["pt"] = "pt-BR"

# OpenGraph locale codes
LOCALE_OG = {
    "en": "en_US",
    "fr": "fr_FR",
    "es": "es_ES",
    "de": "de_DE",
    "pt": "pt_BR",
    "it": "it_IT",
    "nl": "nl_NL",
    "sv": "sv_SE",
    "da": "da_DK",
    "no": "no_NO",
    "fi": "fi_FI",
    "pl": "pl_PL",
    "tr": "tr_TR",
    "id": "id_ID",
}

# Paths that are never localized
PUBLIC_FILE = re.compile(r"\.(.*)$")
EXCLUDED_PATHS = ("/_next", "/api", "/favicon.ico", "/robots.txt", "/sitemap.xml")


def is_valid_locale(locale: str) -> bool:
    return locale in LOCALES


def parse_accept_language(header: Optional[str]) -> list[tuple[str, float]]:
    """
    Parse an Accept-Language header.

    Args:
        header: Raw header value, e.g. "fr-CH, fr;q=0.9, en;q=0.8".

    Returns:
        (language, quality) pairs sorted by descending quality. Only the
        primary language subtag is kept, lower-cased. A missing q-value is
        1.0 and a malformed one is 0.0. Ties keep header order.
    """
    if not header:
        return []

    preferences = []
    for part in header.split(","):
        part = part.strip()
        if not part:
            continue

        tag, _, params = part.partition(";")
        quality = 1.0
        for param in params.split(";"):
            key, _, value = param.strip().partition("=")
            if key.strip().lower() == "q":
                try:
                    quality = float(value.strip())
                except ValueError:
                    quality = 0.0

        language = tag.strip().split("-")[0].lower()
        preferences.append((language, quality))

    return sorted(preferences, key=lambda pref: pref[1], reverse=True)


def negotiate_locale(header: Optional[str]) -> str:
    """Return the best supported locale for a header, or the default."""
    for language, quality in parse_accept_language(header):
        # q=0 marks a language as not acceptable
        if quality > 0 and is_valid_locale(language):
            return language
    return DEFAULT_LOCALE


def has_locale_prefix(path: str) -> bool:
    return any(path == f"/{locale}" or path.startswith(f"/{locale}/") for locale in LOCALES)


def localize_path(path: str, accept_language: Optional[str] = None, query: str = "") -> Optional[str]:
    """
    Work out the redirect target for an unlocalized path.

    Args:
        path: Request path, e.g. "/json-to-csv".
        accept_language: The request's Accept-Language header.
        query: Query string to preserve, with or without the leading "?".

    Returns:
        The localized URL to redirect to, or None when the path should be
        served as-is (static files, excluded prefixes, already localized).
    """
    if PUBLIC_FILE.search(path) or any(path.startswith(p) for p in EXCLUDED_PATHS):
        return None

    if has_locale_prefix(path):
        return None

    locale = negotiate_locale(accept_language)
    target = f"/{locale}{path if path != '/' else ''}"
    if query:
        target += query if query.startswith("?") else f"?{query}"
    return target


def translate(template: str, values: dict[str, str]) -> str:
    """Replace {key} placeholders in a dictionary template."""
    for key, value in values.items():
        template = template.replace(f"{{{key}}}", value)
    return template
