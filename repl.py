import logging
import math
import re

from formula.config import LOGGING_CONFIG
from formula.errors import FormulaError
from formula.session import Formula

# "name = expression" defines name, any other line is evaluated as is
DEFINITION_RE = re.compile(r"^\s*([A-Za-z_][A-Za-z0-9_]*)\s*=(.*)$")


if __name__ == "__main__":
    logging.basicConfig(**LOGGING_CONFIG)
    variables: dict[str, float] = dict()

    while True:
        try:
            line = input("> ")
        except (EOFError, KeyboardInterrupt):
            print()
            break

        if not line.strip():
            continue

        match = DEFINITION_RE.match(line)
        target, code = (match.group(1), match.group(2)) if match else (None, line)

        formula = Formula(code)
        for name, value in variables.items():
            formula.define(name, value)

        try:
            result = formula.evaluate()
        except FormulaError as e:
            print(e)
            continue

        if target is not None:
            if not math.isfinite(result):
                print(f"Not defining {target}: {result} is not a finite number")
                continue
            variables[target] = result

        print(result)
