def canonical_key(url: str) -> str:
    """
    Membership key for URL deduplication

    Strips exactly one trailing slash so ``/page`` and ``/page/`` collide.
    The key is only used for comparison; callers keep the original string.
    """
    return url[:-1] if url.endswith('/') else url


def is_equivalent(url1: str, url2: str) -> bool:
    """Check if two URLs deduplicate to the same page"""
    return canonical_key(url1) == canonical_key(url2)
