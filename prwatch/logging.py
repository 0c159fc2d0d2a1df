import logging
import os
import sys

LEVEL_ENV = "PRWATCH_LOG_LEVEL"

def get_logger(name="prwatch"):
    # progress and errors share stdout with the report, one handler per logger
    log = logging.getLogger(name)
    if not log.handlers:
        level = getattr(logging, os.getenv(LEVEL_ENV, "INFO").upper(), None)
        log.setLevel(level if isinstance(level, int) else logging.INFO)
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s"))
        log.addHandler(handler)
        log.propagate = False
    return log
