"""Shared test helpers."""


def record(signal):
    """Collect every update of signal into a list."""
    log = []
    signal.subscribe(log.append)
    return log
