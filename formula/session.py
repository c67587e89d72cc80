import logging
import math
from types import MappingProxyType
from typing import Mapping

from formula.errors import FormulaError
from formula.parser import evaluate

logger = logging.getLogger(__name__)


class Formula:
    """An expression and the variables it is evaluated against

    The text is kept as given and only checked by ``evaluate``. Variables have to be defined before the evaluation
    that reads them, and stay defined for every later one.
    """

    def __init__(self, code: str) -> None:
        self.code = code
        self._variables: dict[str, float] = dict()

    @property
    def variables(self) -> Mapping[str, float]:
        return MappingProxyType(self._variables)

    def define(self, name: str, value: float) -> None:
        value = float(value)
        if not math.isfinite(value):
            raise ValueError(f"Variable {name!r} must be a finite number, got {value}")
        self._variables[name] = value
        logger.debug(f"Defined {name} = {value}")

    def evaluate(self) -> float:
        try:
            result = evaluate(self.code, self.variables)
        except FormulaError as e:
            logger.debug(f"Evaluation of {self.code!r} failed: {e.errmsg}")
            raise
        logger.debug(f"Evaluated {self.code!r} = {result}")
        return result
