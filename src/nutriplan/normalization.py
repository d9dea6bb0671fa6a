"""Free-text normalization for ingredient and allergen input."""


def normalize(text: str) -> str:
    """Trim surrounding whitespace and lower-case the text."""
    return text.strip().lower()


def split_ingredients(text: str) -> list[str]:
    """Split a comma-separated description into normalized, non-empty tokens."""
    tokens = []
    for chunk in text.split(","):
        value = normalize(chunk)
        if not value:
            continue
        tokens.append(value)
    return tokens


def normalize_terms(raw: object) -> list[str]:
    """Normalize a comma-separated string or a list of terms.

    Blank terms are dropped and repeats keep their first position.
    """
    if not raw:
        return []
    if isinstance(raw, str):
        terms = split_ingredients(raw)
    else:
        terms = [normalize(value) for value in raw if isinstance(value, str)]
    return list(dict.fromkeys(term for term in terms if term))
