"""Token-overlap scoring used when embeddings are unavailable."""


def tokenize(query: str) -> list[str]:
    """Split a query on whitespace and lowercase each token."""
    return query.lower().split()


def lexical_score(query: str, page_text: str) -> float:
    """Score a page by the share of query tokens it contains.

    Each distinct token found anywhere in the lowercased page text (substring
    match) counts once; the count is divided by the total number of query
    tokens. Queries without tokens score 0.0.
    """
    tokens = tokenize(query)
    if not tokens:
        return 0.0

    haystack = page_text.lower()
    found = {token for token in tokens if token in haystack}
    return len(found) / len(tokens)
