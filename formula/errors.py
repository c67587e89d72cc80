from dataclasses import dataclass
from typing import Optional

from formula.utils import source_window


@dataclass
class FormulaError(Exception):
    """Base for everything that can go wrong while evaluating an expression

    ``code`` and ``error_char_idx`` locate the error in the source text when known.
    """

    errmsg: str
    code: Optional[str] = None
    error_char_idx: Optional[int] = None

    def __str__(self) -> str:
        header = f"[{type(self).__name__}] {self.errmsg}"
        if self.code is None or self.error_char_idx is None:
            return header
        excerpt, caret_offset = source_window(self.code, self.error_char_idx)
        return "\n".join([header, excerpt, " " * caret_offset + "^"])
