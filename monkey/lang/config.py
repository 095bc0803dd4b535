"""Configuration for the Monkey interpreter: evaluation limits and logging."""

import logging
from dataclasses import dataclass


@dataclass
class Config:
    """Settings shared by the session, the evaluator and the command line."""
    max_call_depth: int = 256       # nested function calls before evaluation fails with an error value
    recursion_limit: int = 10000    # host recursion limit installed by the evaluator
    log_level: str = "WARNING"


def setup_logging(level="WARNING"):
    """Sets up logging for the interpreter."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
