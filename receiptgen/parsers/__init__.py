"""Field parsers: one raw cell in, a ParseResult out. None of them raise."""

from .amount import parse_amount
from .dates import parse_date
from .name import parse_name
from .text import cell_to_text

__all__ = [
    "parse_amount",
    "parse_date",
    "parse_name",
    "cell_to_text",
]
