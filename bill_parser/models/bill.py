from typing import Annotated
from pydantic import BaseModel, BeforeValidator, ConfigDict


def _number_as_text(value):
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


def _coerce_text(value):
    """Numbers become their string form and null becomes empty text"""
    if value is None:
        return ""
    return _number_as_text(value)


# Editable text fields tolerate numeric or missing values from OCR output
LooseText = Annotated[str, BeforeValidator(_coerce_text)]
# Amounts may arrive as JSON numbers but never as null
AmountText = Annotated[str, BeforeValidator(_number_as_text)]


class LineItem(BaseModel):
    """One named, priced entry of a bill. price is the raw editable text."""
    model_config = ConfigDict(frozen=True)

    name: LooseText = ""
    price: LooseText = ""


class BillDocument(BaseModel):
    """Ordered line items plus their total: the unit handed between stages"""
    model_config = ConfigDict(frozen=True)

    items: list[LineItem]
    total: AmountText
