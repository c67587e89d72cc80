"""Settings for the demonstration scripts"""
import logging
import math
from typing import Any

# Fixed demonstration: 30*20 - 2*105 + 10%3 + 2^3 = 399
DEMO_CONFIG: dict[str, Any] = {
    "expression": "30*n - 2*(50+55) + a%3 + 2^3",
    "variables": {"n": 20, "a": 10},
}

LOGGING_CONFIG: dict[str, Any] = {
    "level": "INFO",
    "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
}


def validate_config(demo_config: dict[str, Any] = DEMO_CONFIG, logging_config: dict[str, Any] = LOGGING_CONFIG) -> None:
    assert isinstance(demo_config["expression"], str), "demo expression must be text"
    for name, value in demo_config["variables"].items():
        assert name.isidentifier(), f"demo variable name {name!r} is not an identifier"
        assert isinstance(value, (int, float)) and math.isfinite(value), f"demo variable {name!r} must be finite"
    level = logging_config["level"]
    assert isinstance(logging.getLevelName(level), int), f"unknown log level {level!r}"
