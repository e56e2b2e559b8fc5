"""Slug generation for post filenames and identifiers"""

import re
import unicodedata


SPECIAL_RE = re.compile(r"[\s~`!@#$%^&*()\-_+=\[\]{}|\\;:\"'<>,.?/]+")
CONTROL_RE = re.compile(r"[\u0000-\u001f\u007f]")

KEEP_CASE = 0
LOWER_CASE = 1
UPPER_CASE = 2


def _strip_diacritics(text: str) -> str:
    """Fold accented characters to their base letter (é → e)."""
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(c for c in decomposed if not unicodedata.combining(c))


def slugize(text: str, transform: int = KEEP_CASE, separator: str = "-") -> str:
    """Convert text to a filename-safe slug, optionally changing case.

    Punctuation and whitespace runs collapse into a single separator; leading
    and trailing separators are stripped. Case is kept unless transform is
    LOWER_CASE or UPPER_CASE (the site's filename_case setting).
    """
    sep = re.escape(separator)
    result = CONTROL_RE.sub("", _strip_diacritics(text))
    result = SPECIAL_RE.sub(separator, result)
    result = re.sub(f"(?:{sep}){{2,}}", separator, result)
    result = re.sub(f"^(?:{sep})+|(?:{sep})+$", "", result)
    if transform == LOWER_CASE:
        return result.lower()
    if transform == UPPER_CASE:
        return result.upper()
    return result
