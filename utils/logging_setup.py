import logging
import logging.handlers
from pathlib import Path

from config import settings

_configured = False


def configure_logging(level=None, log_dir=None):
     """Configure the root logger once.

     A console handler is always installed. When ``log_dir`` (or LOG_DIR) is
     set, a rotating ``app.log`` file handler is added as well.

     Args:
          level: Log level name, defaults to LOG_LEVEL
          log_dir: Directory for the rotating log file, defaults to LOG_DIR
     """
     global _configured
     if _configured:
          return

     level_name = (level or settings.log_level).upper()
     formatter = logging.Formatter(settings.log_format)

     root_logger = logging.getLogger()
     root_logger.setLevel(getattr(logging, level_name, logging.INFO))

     # Remove existing handlers to prevent duplicates
     for handler in root_logger.handlers[:]:
          root_logger.removeHandler(handler)

     console_handler = logging.StreamHandler()
     console_handler.setFormatter(formatter)
     root_logger.addHandler(console_handler)

     directory = log_dir or settings.log_dir
     if directory:
          path = Path(directory)
          path.mkdir(parents=True, exist_ok=True)
          file_handler = logging.handlers.RotatingFileHandler(
               path / "app.log",
               maxBytes=10 * 1024 * 1024,
               backupCount=5,
          )
          file_handler.setFormatter(formatter)
          root_logger.addHandler(file_handler)

     _configured = True
