import logging

from rich.logging import RichHandler


def configure_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(
        level=level,
        format="%(name)s | %(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )
    # httpx logs every outbound request at INFO, which leaks the places key in the URL
    logging.getLogger("httpx").setLevel(logging.WARNING)

