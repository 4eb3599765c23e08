"""Decision engine — registry, selection, evaluation, and execution.

Turns CLI intent plus per-domain detection into one planned action per
domain, then runs those actions and folds the outcomes into one result.
The engine never writes to stdout/stderr; it only logs through the
context logger.
"""
