"""
User-facing messages of the doppelganger CLI in German (de) and English (en).

Result lines and CSV columns are not translated; only the surrounding
status, summary and error messages are.
"""

from typing import Optional


SUPPORTED_LANGUAGES = frozenset({"de", "en"})
DEFAULT_LANGUAGE = "en"


# {message_key: {language_code: template}}
TRANSLATIONS: dict[str, dict[str, str]] = {
    "validation.subdomain_ignored": {
        "de": "Subdomain '{subdomain}' wird ignoriert",
        "en": "Ignoring subdomain '{subdomain}'",
    },

    # Scan progress
    "scan.checking": {
        "de": "prüfe {count} Varianten für '{domain}', bitte warten ...",
        "en": "checking {count} variations for '{domain}', please wait ...",
    },
    "scan.progress": {
        "de": "Prüfe Varianten",
        "en": "Checking variations",
    },
    "scan.no_candidates": {
        "de": "Keine Varianten für '{domain}' mit diesem Wörterbuch",
        "en": "No variations for '{domain}' with this dictionary",
    },
    "scan.summary": {
        "de": "{total} geprüft: {available} verfügbar, {registered} registriert, {live} aktiv",
        "en": "{total} checked: {available} available, {registered} registered, {live} live",
    },
    "scan.duration": {
        "de": "Dauer: {seconds:.1f} Sekunden",
        "en": "Duration: {seconds:.1f} seconds",
    },

    "output.saved": {
        "de": "gespeichert in {path}",
        "en": "saved to {path}",
    },

    # Fatal errors
    "error.validation": {
        "de": "Ungültige Domain: {message}",
        "en": "Validation error: {message}",
    },
    "error.output": {
        "de": "Ausgabefehler: {message}",
        "en": "Output error: {message}",
    },
    "config.invalid": {
        "de": "Ungültige Konfiguration: {message}",
        "en": "Invalid configuration: {message}",
    },

    "simulation.enabled": {
        "de": "Simulationsmodus - es werden keine Anfragen gesendet",
        "en": "Simulation mode - no queries are sent",
    },
}


def get_message(key: str, language: Optional[str] = None, **kwargs) -> str:
    """
    Look up and format a message.

    Unknown languages use DEFAULT_LANGUAGE and unknown keys are returned
    as-is. A template that cannot be formatted with ``kwargs`` is returned
    unformatted.

        >>> get_message('output.saved', 'de', path='out.csv')
        'gespeichert in out.csv'
    """
    if language not in SUPPORTED_LANGUAGES:
        language = DEFAULT_LANGUAGE

    translations = TRANSLATIONS.get(key, {})
    template = translations.get(language) or translations.get(DEFAULT_LANGUAGE)
    if template is None:
        return key

    if not kwargs:
        return template
    try:
        return template.format(**kwargs)
    except (KeyError, ValueError):
        return template


def get_all_message_keys() -> set[str]:
    return set(TRANSLATIONS)


def has_translation(key: str, language: str) -> bool:
    return language in TRANSLATIONS.get(key, {})


def get_missing_translations(language: str) -> set[str]:
    """Keys without a template for ``language``."""
    return {key for key, translations in TRANSLATIONS.items() if language not in translations}


def validate_translations() -> dict[str, set[str]]:
    """Map every supported language to its missing keys (empty when complete)."""
    return {language: get_missing_translations(language) for language in SUPPORTED_LANGUAGES}
