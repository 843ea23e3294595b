# pdf/utils/text_utils.py

def sanitize_text(value):
    """
    Ensures text is safe for FPDF core fonts (Latin-1) by converting to string
    and replacing unsupported characters.
    """
    if value is None:
        return ""

    text = str(value)

    return text.encode("latin-1", "replace").decode("latin-1")


def truncate(value, max_chars):
    text = sanitize_text(value)
    if len(text) <= max_chars:
        return text
    return text[:max_chars - 3] + "..."


__all__ = ["sanitize_text", "truncate"]
