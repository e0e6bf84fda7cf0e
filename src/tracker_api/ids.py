"""Sequential identifiers of the form `<prefix><zero-padded number>`."""
from typing import Iterable

DEFAULT_ID_WIDTH = 3


def next_id(existing_ids: Iterable[str], prefix: str, width: int = DEFAULT_ID_WIDTH) -> str:
    """
    Compute the identifier following the highest one already issued for `prefix`.

    Values without the prefix are ignored and a non-numeric suffix counts as 0.
    The number is padded to `width` digits but never truncated, so
    `next_id(["BCIEINM999"], "BCIEINM")` is `"BCIEINM1000"`.

    Callers must hold the table lock between reading `existing_ids` and writing
    the new row, otherwise two requests can compute the same identifier.

    Args:
        existing_ids: Current values of the identifier column
        prefix: Identifier prefix, e.g. "BCIEINM"
        width: Minimum number of digits

    Returns:
        The next identifier, e.g. "BCIEINM006"
    """
    highest = 0
    for value in existing_ids:
        value = str(value)
        if not value.startswith(prefix):
            continue
        suffix = value[len(prefix):]
        number = int(suffix) if suffix.isascii() and suffix.isdigit() else 0
        highest = max(highest, number)
    return f"{prefix}{highest + 1:0{width}d}"
