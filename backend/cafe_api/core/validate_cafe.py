"""Cafe Validation Rules - presence and uniqueness messages as pure functions.

Invariants:
    - Blank means None, empty, or whitespace-only
    - Error mapping keys are field names; values are non-empty message lists
    - Fields are reported in declaration order (title before address)

Design Decisions:
    - Messages mirror the wording front-end clients already display
      ("can't be blank", "has already been taken")
"""

BLANK_MESSAGE = "can't be blank"
TAKEN_MESSAGE = "has already been taken"

REQUIRED_FIELDS: tuple[str, ...] = ("title", "address")


def is_blank(value: object) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def check_required_fields(fields: dict) -> dict[str, list[str]]:
    """Return a presence error for every required field that is blank."""
    return {
        name: [BLANK_MESSAGE]
        for name in REQUIRED_FIELDS
        if is_blank(fields.get(name))
    }


def uniqueness_violation() -> dict[str, list[str]]:
    """Error mapping for a duplicate (title, address) pair.

    Reported on title, scoped by address.
    """
    return {"title": [TAKEN_MESSAGE]}


def merge_errors(*mappings: dict[str, list[str]]) -> dict[str, list[str]]:
    """Merge error mappings, concatenating messages for repeated fields."""
    merged: dict[str, list[str]] = {}
    for mapping in mappings:
        for name, messages in mapping.items():
            merged.setdefault(name, []).extend(messages)
    return merged
