"""
probes/log.py — stderr logging for the plugin.

stdout carries only the status line, so every diagnostic goes to stderr:
-v INFO, -vv DEBUG, -vvv TRACE (adds a dump of the decoded JMX document).
"""

import logging
import sys

logger = logging.getLogger("yarn_rm_check")

# -vvv: dump of the decoded JMX document
TRACE = 5
logging.addLevelName(TRACE, "TRACE")

_LEVELS = {0: logging.WARNING, 1: logging.INFO, 2: logging.DEBUG}


def configure_logger(verbosity: int) -> None:
    # stdout is reserved for the single status line
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s %(message)s"))
    logger.handlers[:] = [handler]
    logger.setLevel(_LEVELS.get(verbosity, TRACE))
    logger.propagate = False
