import logging
import os
import opentelemetry.trace
from azure.monitor.opentelemetry import configure_azure_monitor

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Package logger; every module logs through a child of it
logger = logging.getLogger("product_api")

# Proxy tracer, bound to whichever provider is configured later
tracer = opentelemetry.trace.get_tracer("product_api")

_azure_monitor_enabled = False


def configure_logging(level: str = "INFO") -> logging.Logger:
    """
    Set up the package logger for a running application.

    Attaches a console handler on first use and applies `level` every time.
    When APPLICATIONINSIGHTS_CONNECTION_STRING is set, logs and spans are
    also exported to Azure Monitor (configured once per process).
    """
    global _azure_monitor_enabled

    if not logger.handlers:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(console_handler)

    logger.setLevel(level.upper())

    if os.environ.get("APPLICATIONINSIGHTS_CONNECTION_STRING") and not _azure_monitor_enabled:
        try:
            configure_azure_monitor()
            _azure_monitor_enabled = True
            logger.info("Azure Monitor export enabled")
        except Exception as e:
            logger.error(f"Error configuring Azure Monitor: {e}")

    return logger


def get_child_logger(name):
    """Get a child logger with the given name."""
    return logger.getChild(name)
