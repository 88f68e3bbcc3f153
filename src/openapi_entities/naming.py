"""Derive every naming variant a downstream generator needs from a raw identifier.

All functions are pure: the same input always yields the same output.

Examples:
  pascal_identifier("user_id")        -> "UserID"
  snake_singular("UserID")            -> "user_id"
  plural_identifier("Userid")         -> "UserIds"
  json_key("user_id")                 -> "userId"
  short_alias("UserProfile")          -> "up"
"""

from __future__ import annotations

import re

import inflection

# Words rendered fully upper-case inside identifiers
INITIALISMS: frozenset[str] = frozenset({
    "ACL", "API", "ASCII", "CPU", "CSS", "DNS", "EOF", "GUID", "HTML", "HTTP",
    "HTTPS", "ID", "IP", "JSON", "LHS", "QPS", "RAM", "RHS", "RPC", "SLA",
    "SMTP", "SQL", "SSH", "TCP", "TLS", "TTL", "UDP", "UI", "UID", "UUID",
    "URI", "URL", "UTF8", "VM", "XML", "XMPP", "XSRF", "XSS",
})

# The generic pluralizer treats these as uncountable
PLURAL_OVERRIDES: dict[str, str] = {
    "information": "informations",
    "Information": "Informations",
}

_MAX_INITIALISM = max(len(i) for i in INITIALISMS)

_SEPARATORS = re.compile(r"[^A-Za-z0-9]+")
_WORD = re.compile(r"[A-Z]+(?=[A-Z][a-z]|[^A-Za-z]|$)|[A-Z]?[a-z]+|[A-Z]+|[0-9]+")
_UPPER = re.compile(r"[A-Z]")


def _split_initialisms(run: str) -> list[str]:
    """Split an upper-case run like 'XMLHTTP' into known initialisms, or keep it whole."""
    parts = []
    rest = run
    while rest:
        for size in range(min(len(rest), _MAX_INITIALISM), 1, -1):
            if rest[:size] in INITIALISMS:
                parts.append(rest[:size])
                rest = rest[size:]
                break
        else:
            return [run]
    return parts


def _words(s: str) -> list[str]:
    """Break an identifier in any casing into words, keeping digits with the preceding word."""
    if _SEPARATORS.search(s) and not any(c.islower() for c in s):
        # SCREAMING_SNAKE_CASE
        s = s.lower()

    words: list[str] = []
    for chunk in _SEPARATORS.split(s):
        chunk_words: list[str] = []
        for token in _WORD.findall(chunk):
            if token.isdigit() and chunk_words:
                chunk_words[-1] += token
            elif token.isupper() and len(token) > 1:
                chunk_words.extend(_split_initialisms(token))
            else:
                chunk_words.append(token)
        words.extend(chunk_words)
    return words


def _title(word: str) -> str:
    if word.upper() in INITIALISMS:
        return word.upper()
    if word.isupper() and len(word) > 1:
        return word
    return word[0].upper() + word[1:].lower()


def pascal_identifier(s: str) -> str:
    """Force any identifier (snake, kebab, spaced, mixed) into a valid PascalCase identifier.

    Non-identifier characters become word breaks and leading digits are dropped.
    Already-PascalCase output is returned unchanged.
    """
    words = _words(s)
    while words and words[0].isdigit():
        words.pop(0)
    return "".join(_title(w) for w in words)


def snake_singular(pascal: str) -> str:
    """Convert a PascalCase identifier to snake_case, keeping initialisms whole."""
    return "_".join(w.lower() for w in _words(pascal))


def plural_form(s: str) -> str:
    """Pluralize an English word, with overrides for words the inflector gets wrong."""
    out = inflection.pluralize(s)
    return PLURAL_OVERRIDES.get(out, out)


def lower_camel(s: str) -> str:
    """Lowercase only the first character."""
    return s[:1].lower() + s[1:]


def json_key(raw_key: str) -> str:
    """Return the lower-camel JSON key for a raw property or parameter name.

    A trailing "id" is always spelled "Id" unless the whole key is "id".
    """
    parts = [p for p in _SEPARATORS.split(raw_key) if p]
    if not parts:
        return ""
    head = parts[0].lower() if parts[0].isupper() else lower_camel(parts[0])
    key = head + "".join(p[0].upper() + p[1:] for p in parts[1:])
    if len(key) > 2 and key.endswith("id"):
        key = key[:-2] + "Id"
    return key


def plural_identifier(pascal: str) -> str:
    """Pluralize a PascalCase identifier, spelling a trailing 'ids' as 'Ids'."""
    out = plural_form(pascal)
    if out.endswith("ids"):
        out = out[:-3] + "Ids"
    return out


def short_alias(pascal: str) -> str:
    """Concatenate the upper-case letters of an identifier and lowercase them.

    Collisions between entities are not detected.
    """
    return "".join(_UPPER.findall(pascal)).lower()
