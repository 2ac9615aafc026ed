"""
Shared utilities for the Carbon Route Agent modules.

Contains:
- round_half_up(): decimal rounding, halves away from zero
- log_structured(): structured CloudWatch logging with session context
"""

import json
import logging
import math
from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP, localcontext

logger = logging.getLogger(__name__)


def round_half_up(value, decimals: int = 2):
    """
    Round a number to a fixed number of decimals, halves away from zero.

    Built-in round() uses banker's rounding on the binary value, so
    round(0.125, 2) gives 0.12. This rounds the shortest decimal repr
    instead: round_half_up(0.125, 2) == 0.13, round_half_up(1.005, 2) == 1.01.

    Args:
        value: Number to round
        decimals: Decimal places (0 returns an int)

    Returns:
        Rounded float, or int when decimals == 0. inf and nan come back
        unchanged as floats.
    """
    value = float(value)
    if not math.isfinite(value):
        return value

    exact = Decimal(repr(value))
    quantum = Decimal(1).scaleb(-decimals)
    with localcontext() as ctx:
        # quantize needs room for every integer digit plus the decimals
        ctx.prec = max(ctx.prec, exact.adjusted() + decimals + 2)
        rounded = exact.quantize(quantum, rounding=ROUND_HALF_UP)
    if decimals == 0:
        return int(rounded)
    return float(rounded)


def log_structured(level, message, session_id=None, stage=None, **kwargs):
    """
    Log structured messages with session context for better filtering/analytics.

    CloudWatch Insights query example:
    fields @timestamp, message, session_id, stage, distance_method
    | filter session_id = "A52321B"
    | sort @timestamp asc
    """
    log_data = {
        'timestamp': datetime.now(timezone.utc).isoformat(),
        'session_id': session_id,
        'agent': 'CarbonRouteAgent',
        'stage': stage,
        'message': message,
        **kwargs
    }

    # Create human-readable message with structured data
    log_message = f"[Session: {session_id}] [Stage: {stage}] {message}"
    if kwargs:
        log_message += f" | {json.dumps(kwargs, ensure_ascii=False, default=str)}"

    if level == 'INFO':
        logger.info(log_message)
    elif level == 'ERROR':
        logger.error(log_message)
    elif level == 'WARNING':
        logger.warning(log_message)
    else:
        logger.debug(log_message)

    return log_data
