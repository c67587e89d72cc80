import logging

from formula.config import DEMO_CONFIG, LOGGING_CONFIG, validate_config
from formula.errors import FormulaError
from formula.session import Formula
from formula.tokenizer import tokenize

SAMPLE_VARIABLES = {"x": 1.5, "y": -4.0, "_tmp1": 8.0}

if __name__ == "__main__":
    validate_config()
    logging.basicConfig(**LOGGING_CONFIG)

    demo = Formula(DEMO_CONFIG["expression"])
    for name, value in DEMO_CONFIG["variables"].items():
        demo.define(name, value)
    print(f"Result: {demo.evaluate():g}")

    for code in [
        "5",
        "1 + 1",
        "4 + 6 * 3",
        "(4 + 6)",
        "(4+6) * 3",
        "7/6/2000",
        "5^2",
        "2^3^2",
        "10 % 3",
        "-7 % 3",
        "x * y + _tmp1",
        "(1 + 14 * (54^2))",
        "1.2.3",
        "1 / (x - 1.5)",
        "z + 1",
        "2 # 3",
        "(1 + 2",
        "2 + 3) * 4",
        "(0 - 8) ^ 0.5",
    ]:
        print("=" * 10)
        print(f"code: {code!r}")
        try:
            tokens = tokenize(code, SAMPLE_VARIABLES)
        except FormulaError as e:
            print(e)
            continue

        print(f"tokens: {' '.join(str(t) for t in tokens)}")

        formula = Formula(code)
        for name, value in SAMPLE_VARIABLES.items():
            formula.define(name, value)
        try:
            result = formula.evaluate()
        except FormulaError as e:
            print(e)
            continue
        print(f"result: {result}")
