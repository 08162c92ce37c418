def pad(text: str, width: int = 24) -> str:
    """Left-justify `text` to `width` columns. Longer text is returned unchanged."""
    return text.ljust(width)
