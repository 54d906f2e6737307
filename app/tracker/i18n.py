"""Language selection: which locale the presentation layer should use."""

from __future__ import annotations

SUPPORTED_LANGUAGES: tuple[str, ...] = ("pt", "en", "es")
FALLBACK_LANGUAGE = "pt"


def normalize_language(code: str | None) -> str | None:
    """Lower-cased supported code, or None."""
    if not code:
        return None
    code = code.strip().lower()
    return code if code in SUPPORTED_LANGUAGES else None


def primary_subtag(locale: str | None) -> str | None:
    """'pt-BR' -> 'pt'; an Accept-Language header uses its first entry.

    'en-US,en;q=0.9,pt;q=0.8' -> 'en'
    """
    if not locale:
        return None
    first = locale.split(",", 1)[0].split(";", 1)[0].strip()
    if not first or first == "*":
        return None
    return first.replace("_", "-").split("-", 1)[0].lower()


def resolve_language(
    stored: str | None,
    browser_locale: str | None = None,
    default: str = FALLBACK_LANGUAGE,
) -> str:
    """Stored choice if supported, else the browser's language, else `default`.

    An unsupported `default` falls back to Portuguese.
    """
    chosen = normalize_language(stored) or normalize_language(primary_subtag(browser_locale))
    if chosen:
        return chosen
    return normalize_language(default) or FALLBACK_LANGUAGE
