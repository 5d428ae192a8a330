# museum/utils/text.py
import re
import secrets
import string

_ALNUM = string.ascii_letters + string.digits


def slugify(text: str) -> str:
    """Convert a string to a URL-friendly slug."""
    text = text.lower().strip()
    text = re.sub(r"[^\w\s-]", "", text)
    text = re.sub(r"[\s_]+", "-", text)
    return re.sub(r"-{2,}", "-", text).strip("-")


def random_string(length: int) -> str:
    return "".join(secrets.choice(_ALNUM) for _ in range(length))
