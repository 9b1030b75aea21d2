import logging
from typing import Optional
from rich.console import Console
from rich.logging import RichHandler
from litbook.core import config

_CONFIGURED = False

def setup(level: Optional[str] = None) -> logging.Logger:
    global _CONFIGURED
    if not _CONFIGURED:
        level = level or config.get("LITBOOK_LOG_LEVEL", "INFO")
        # stdout is reserved for the preprocessor payload
        logging.basicConfig(
            level=getattr(logging, level.upper(), logging.INFO),
            format="%(message)s",
            datefmt="[%X]",
            handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        )
        _CONFIGURED = True
    return logging.getLogger("litbook")

def get_logger(name: Optional[str] = None) -> logging.Logger:
    if not _CONFIGURED:
        setup()
    return logging.getLogger(name or "litbook")
