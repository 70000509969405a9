"""Filename/folder based category detection.

The rules are checked in order and the first match wins, so overlapping
patterns ("dsc01077" is both a street and a jewels pattern) resolve to the
earlier rule.
"""

import re
from typing import NamedTuple

UNCATEGORIZED = "uncategorized"

CATEGORIES = (
    "documentary",
    "portraits",
    "product",
    "macro",
    "street",
    "interior",
    "jewels",
    UNCATEGORIZED,
)

# Second path segment -> category. Includes the misspelled folder names the
# portfolio was uploaded with.
FOLDER_CATEGORIES = {
    "documentry": "documentary",
    "documentary": "documentary",
    "potraits": "portraits",
    "portraits": "portraits",
    "product": "product",
    "macro": "macro",
    "street": "street",
    "interior": "interior",
    "jelws": "jewels",
    "jewels": "jewels",
}


class Rule(NamedTuple):
    category: str
    field: str  # "id" or "filename"
    pattern: re.Pattern


def _rule(category: str, pattern: str, field: str = "id") -> Rule:
    return Rule(category, field, re.compile(pattern, re.IGNORECASE))


RULES = (
    _rule("documentary", r"eol|document"),
    _rule("portraits", r"dsc00|portrait|potrait"),
    _rule("product", r"product"),
    _rule("product", r"^\d+_", field="filename"),
    _rule("macro", r"macro"),
    _rule("street", r"dsc01077|street"),
    _rule("interior", r"hdr|interior|untitled"),
    _rule("jewels", r"jewel|dsc01"),
)


def folder_category(public_id: str, asset_folder: str | None = None) -> str | None:
    """Category implied by the second path segment, if the asset sits in a known subfolder.

    Dynamic-folder accounts keep the folder only in ``asset_folder``, so it is
    checked before the identifier.
    """
    if asset_folder:
        parts = asset_folder.split("/")
        if len(parts) > 1:
            category = FOLDER_CATEGORIES.get(parts[1].lower())
            if category:
                return category
    parts = public_id.split("/")
    if len(parts) > 2:
        return FOLDER_CATEGORIES.get(parts[1].lower())
    return None


def categorize(public_id: str, filename: str | None = None, asset_folder: str | None = None) -> str:
    if filename is None:
        filename = public_id.rsplit("/", 1)[-1]

    category = folder_category(public_id, asset_folder)
    if category:
        return category

    for rule in RULES:
        subject = public_id if rule.field == "id" else filename
        if rule.pattern.search(subject):
            return rule.category
    return UNCATEGORIZED
