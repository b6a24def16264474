"""
Edit-list operations on bill line items.

Every operation returns a new list. Lists handed out earlier, and the frozen
LineItem objects inside them, are never modified.

strict=True (the default) raises OutOfRange for a bad index. strict=False
mirrors an edit screen that can never offer a bad index and quietly returns
an unchanged copy instead.
"""

from typing import Literal, Sequence

from ..core.errors import OutOfRange
from ..models.bill import LineItem

EditableField = Literal["name", "price"]
EDITABLE_FIELDS = ("name", "price")
NEW_ITEM_PRICE = "0.00"


def _index_ok(items: Sequence[LineItem], index: int) -> bool:
    return 0 <= index < len(items)


def update_field(
    items: Sequence[LineItem],
    index: int,
    field: EditableField,
    value: str,
    strict: bool = True,
) -> list[LineItem]:
    """Replace one field of the item at index"""
    if field not in EDITABLE_FIELDS:
        raise ValueError(f"Unknown item field '{field}', expected one of {EDITABLE_FIELDS}")

    if not _index_ok(items, index):
        if strict:
            raise OutOfRange(index, len(items))
        return list(items)

    updated = list(items)
    updated[index] = items[index].model_copy(update={field: "" if value is None else str(value)})
    return updated


def add_item(items: Sequence[LineItem]) -> list[LineItem]:
    """Append a blank item priced at 0.00"""
    return [*items, LineItem(name="", price=NEW_ITEM_PRICE)]


def remove_item(items: Sequence[LineItem], index: int, strict: bool = True) -> list[LineItem]:
    """Drop the item at index, keeping the order of the rest"""
    if not _index_ok(items, index):
        if strict:
            raise OutOfRange(index, len(items))
        return list(items)

    return [item for i, item in enumerate(items) if i != index]
