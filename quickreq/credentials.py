"""quickreq credentials - mirror the active API key into vendor headers.

Which header receives the key is decided by a rule table of
``{pattern -> header}`` entries. A rule applies when its pattern occurs in
the request URL. Only the rule's header is touched.
"""

from __future__ import annotations

from quickreq.models import RequestData


class CredentialRule:
    """Mirror the credential into ``header`` for URLs containing ``pattern``."""

    def __init__(self, pattern: str, header: str):
        self.pattern = pattern
        self.header = header

    def matches(self, url: str) -> bool:
        return bool(self.pattern) and self.pattern in (url or "")

    def __eq__(self, other):
        if not isinstance(other, CredentialRule):
            return NotImplemented
        return (self.pattern, self.header) == (other.pattern, other.header)

    def __repr__(self) -> str:
        return f"CredentialRule({self.pattern!r} -> {self.header!r})"


DEFAULT_RULES = [
    CredentialRule("anthropic.com", "x-api-key"),
]


def rules_from_config(entries: list | None) -> list[CredentialRule]:
    """Built-in rules followed by ``credential_headers`` entries from config.

    Entries missing a pattern or header are ignored.
    """
    rules = list(DEFAULT_RULES)
    for entry in entries or []:
        if not isinstance(entry, dict):
            continue
        pattern = entry.get("pattern")
        header = entry.get("header")
        if pattern and header:
            rules.append(CredentialRule(str(pattern), str(header)))
    return rules


def headers_for(url: str, rules: list[CredentialRule]) -> list[str]:
    """Header names the credential should be mirrored into for ``url``."""
    names: list[str] = []
    for rule in rules:
        if rule.matches(url) and rule.header not in names:
            names.append(rule.header)
    return names


def apply_credential(
    request: RequestData,
    credential: str,
    rules: list[CredentialRule],
    overwrite_empty: bool = False,
) -> list[str]:
    """Write ``credential`` into every matching header of ``request`` in place.

    Does nothing without a credential unless ``overwrite_empty`` is set, in
    which case matching headers are blanked so a cleared key is not sent.
    Returns the header names written.
    """
    if not credential and not overwrite_empty:
        return []
    credential = credential or ""
    names = headers_for(request.url, rules)
    for name in names:
        request.headers[name] = credential
    return names
