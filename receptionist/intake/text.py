# receptionist/intake/text.py
import re

_WHITESPACE = re.compile(r"\s+")


def normalize_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def to_match_key(text: str) -> str:
    return text.lower()


def title_case_name(text: str) -> str:
    """
    "amit KUMAR" -> "Amit Kumar". Unlike str.title(), only the first
    character of each space-separated token is upper-cased, so "o'neil"
    stays "O'neil".
    """
    parts = [part for part in text.lower().split(" ") if part]
    return " ".join(part[0].upper() + part[1:] for part in parts)
