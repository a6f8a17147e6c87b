"""Text processing utilities."""
import re

_CODE_FENCE = re.compile(r"```(?:json)?[ \t]*\r?\n?", re.IGNORECASE)


def clean_text(text: str) -> str:
    """Clean and normalize text content."""
    if not text:
        return ""
    # Remove extra whitespace and normalize
    text = re.sub(r'\s+', ' ', text.strip())
    return text


def strip_code_fences(text: str) -> str:
    """
    Remove markdown code-fence markers a model may wrap around its answer.

    Both the opening marker (with an optional ``json`` tag) and the closing
    marker are removed; the text between them is kept. Other words next to
    a fence are left alone.
    """
    if not text:
        return ""
    return _CODE_FENCE.sub("", text).strip()


def format_bullet_list(items) -> str:
    """Render an iterable of strings as a markdown bullet list."""
    return "\n".join(f"- {item}" for item in items if item)
