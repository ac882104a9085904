import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional


class CountingHandler(logging.Handler):
    """Counts warnings and errors emitted while attached, keeping the warning texts."""

    def __init__(self):
        super().__init__(level=logging.WARNING)
        self.warnings = 0
        self.errors = 0
        self.messages: List[str] = []

    def emit(self, record):
        if record.levelno >= logging.ERROR:
            self.errors += 1
        else:
            self.warnings += 1
            self.messages.append(record.getMessage())


@contextmanager
def counting_logs(logger: Optional[logging.Logger] = None) -> Iterator[CountingHandler]:
    """Attach a CountingHandler to `logger` (root by default) for the duration of the block."""
    target = logger or logging.getLogger()
    counter = CountingHandler()
    target.addHandler(counter)
    try:
        yield counter
    finally:
        target.removeHandler(counter)
