"""quickreq i18n - message lookup for user-facing text.

Nothing in quickreq branches on a translated string; the tables only feed
log messages and CLI labels.
"""

from __future__ import annotations

DEFAULT_LANGUAGE = "en"

EN = {
    # labels
    "title": "QuickReq",
    "savedRequests": "Saved Requests",
    "requestHistory": "Request History",
    "apiKeys": "API Keys",
    "apiPresets": "API Presets",
    "requestLogs": "Request Logs",
    # presets
    "anthropicChat": "Anthropic Chat",
    "jsonPlaceholder": "JSONPlaceholder Posts",
    "httpBin": "HTTPBin Test",
    # messages
    "presetLoaded": "Loaded preset",
    "requestSaved": "Request saved as",
    "apiKeySaved": "API key saved as",
    "loadedSavedRequest": "Loaded saved request",
    "loadedHistoryRequest": "Loaded request from history",
    "loadedApiKey": "Loaded API key",
    "savedRequestDeleted": "Saved request deleted",
    "historyEntryDeleted": "History entry deleted",
    "apiKeyDeleted": "API key deleted",
    "requestsExported": "Requests exported successfully",
    "requestsImported": "Requests imported successfully",
    "importFailed": "Failed to import requests",
    "invalidFileFormat": "Invalid file format",
    "logsCleared": "Logs cleared",
    "sendingRequest": "Sending {method} request to {url}",
    "responseReceived": "Response received ({status} {statusText})",
    "requestFailed": "Request failed",
    "urlRequired": "URL is required",
    "noSavedRequests": "No saved requests.",
    "noHistory": "No request history.",
    "noApiKeys": "No saved API keys.",
}

NL = {
    "title": "QuickReq",
    "savedRequests": "Opgeslagen Requests",
    "requestHistory": "Request Geschiedenis",
    "apiKeys": "API Sleutels",
    "apiPresets": "API Voorinstellingen",
    "requestLogs": "Request Logs",
    "anthropicChat": "Anthropic Chat",
    "jsonPlaceholder": "JSONPlaceholder Posts",
    "httpBin": "HTTPBin Test",
    "presetLoaded": "Voorinstelling geladen",
    "requestSaved": "Request opgeslagen als",
    "apiKeySaved": "API sleutel opgeslagen als",
    "loadedSavedRequest": "Opgeslagen request geladen",
    "loadedHistoryRequest": "Request uit geschiedenis geladen",
    "loadedApiKey": "API sleutel geladen",
    "savedRequestDeleted": "Opgeslagen request verwijderd",
    "historyEntryDeleted": "Geschiedenisitem verwijderd",
    "apiKeyDeleted": "API sleutel verwijderd",
    "requestsExported": "Requests succesvol geëxporteerd",
    "requestsImported": "Requests succesvol geïmporteerd",
    "importFailed": "Importeren van requests mislukt",
    "invalidFileFormat": "Ongeldig bestandsformaat",
    "logsCleared": "Logs gewist",
    "sendingRequest": "{method} request verzenden naar {url}",
    "responseReceived": "Antwoord ontvangen ({status} {statusText})",
    "requestFailed": "Request mislukt",
    "urlRequired": "URL is verplicht",
    "noSavedRequests": "Geen opgeslagen requests.",
    "noHistory": "Geen request geschiedenis.",
    "noApiKeys": "Geen opgeslagen API sleutels.",
}

TRANSLATIONS = {"en": EN, "nl": NL}


def normalize_language(lang: str | None) -> str:
    if lang and lang.lower() in TRANSLATIONS:
        return lang.lower()
    return DEFAULT_LANGUAGE


def translate(key: str, params: dict | None = None, lang: str = DEFAULT_LANGUAGE) -> str:
    """Look up ``key`` in ``lang``, falling back to English, then the key itself.

    ``{name}`` placeholders are filled from params.
    """
    table = TRANSLATIONS.get(lang, EN)
    text = table.get(key) or EN.get(key) or key
    if params:
        for name, value in params.items():
            text = text.replace(f"{{{name}}}", str(value))
    return text


class Translator:
    """translate() bound to one language."""

    def __init__(self, lang: str | None = None):
        self.lang = normalize_language(lang)

    def __call__(self, key: str, params: dict | None = None) -> str:
        return translate(key, params, self.lang)
