import logging
import sys
from .config import Settings, settings as default_settings

# libraries whose chatter is kept out of the relay's log stream
QUIET_LOGGERS = {
    "uvicorn.access": logging.INFO,
    # httpx logs every request at info, warehouse calls are logged by the deliverer
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
}


def configure_logging(settings: Settings = default_settings) -> None:
    """
    Configure application-wide logging once, at startup.
    Every line carries environment and app name so relay logs can be told
    apart on a shared stdout (Vercel, Docker).
    """
    logging.basicConfig(
        level=logging.INFO,
        format=(
            "%(asctime)s | %(levelname)s | %(name)s | "
            f"{settings.environment} | {settings.app_name} | "
            "%(message)s"
        ),
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    for name, level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(level)
