from pydantic import BaseModel
from ..models.bill import AmountText, LineItem


class ParsedBill(BaseModel):
    """Success body returned by the parse service"""
    items: list[LineItem]
    total: AmountText | None = None  # trusted verbatim when present
