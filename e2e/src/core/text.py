def normalize_text(s: str) -> str:
    # collapses nbsp and the line breaks inner_text puts between inline elements
    return " ".join((s or "").split())
