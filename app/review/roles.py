import re
import string

_SEPARATORS = re.compile(r"[\s_-]+")
_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)

def normalize_role_name(value: str) -> str:
    """Lower-case a free-text role name and fold whitespace, '-' and '_' runs into one space.

    Only A-Z are lower-cased. Separators are collapsed before trimming so that
    a trailing "_" can't leave a trailing space behind, which keeps
    normalize(normalize(x)) == normalize(x).
    """
    collapsed = _SEPARATORS.sub(" ", value.translate(_ASCII_LOWER))
    return collapsed.strip()
