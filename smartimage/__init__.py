"""smartimage."""

from importlib.metadata import PackageNotFoundError, version

from .logs.logs import setup_logger

LOGGER = setup_logger()

try:
    __version__ = version("smartimage")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"
__release__ = ".".join(__version__.split(".")[:2])

CONFIG_DOCUMENTATION_REFERENCE = """# Options are described alongside each entry, see the README for details.\n"""


def log_smartimage_version() -> None:
    """Log the smartimage version to system logger."""
    LOGGER.info(f"smartimage version : {__version__}")
