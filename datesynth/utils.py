"""
Output and Logging Helpers

- Writing generated frames to disk, format picked from the file suffix
- Logger setup for the ``datesynth`` package (console plus rotating file)
"""

import sys
import logging
from pathlib import Path
from typing import Optional, Union
import pandas as pd
from logging.handlers import RotatingFileHandler

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s %(levelname)-8s %(name)s: %(message)s'
LOG_MAX_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5


class FileHandler:
    """
    Writes generated frames

    Datetime columns go out as ISO-8601 in JSON; other formats keep the
    pandas defaults.
    """

    WRITERS = {
        '.csv': lambda data, path, **kw: data.to_csv(path, index=False, **kw),
        '.xlsx': lambda data, path, **kw: data.to_excel(path, index=False, **kw),
        '.json': lambda data, path, **kw: data.to_json(path, orient='records', date_format='iso', **kw),
        '.parquet': lambda data, path, **kw: data.to_parquet(path, **kw),
        '.pkl': lambda data, path, **kw: data.to_pickle(path, **kw),
    }

    @classmethod
    def write_file(cls, data: pd.DataFrame, filepath: Union[str, Path], **kwargs):
        """
        Write a generated frame, creating parent directories

        Args:
            data: Generated frame
            filepath: Target path; its suffix selects the format
            **kwargs: Passed through to the pandas writer

        Raises:
            ValueError: if the suffix has no writer
        """
        filepath = Path(filepath)
        writer = cls.WRITERS.get(filepath.suffix.lower())
        if writer is None:
            raise ValueError(
                f"Unsupported file format: {filepath.suffix} "
                f"(expected one of {', '.join(cls.WRITERS)})"
            )

        filepath.parent.mkdir(parents=True, exist_ok=True)

        try:
            writer(data, filepath, **kwargs)
        except Exception as e:
            logger.error(f"Could not write {len(data)} rows to {filepath}: {e}")
            raise

        logger.info(f"Wrote {len(data)} rows to {filepath}")


class LoggerConfig:
    """Logger setup for the package"""

    @staticmethod
    def setup_logger(
        name: str = "datesynth",
        level: int = logging.INFO,
        log_file: Optional[Union[str, Path]] = None,
        log_to_console: bool = True,
        log_format: str = LOG_FORMAT
    ) -> logging.Logger:
        """
        Configure a logger, replacing handlers from earlier calls

        Console output goes to stderr so it does not mix with data printed
        by the CLI.

        Args:
            name: Logger name
            level: Level for the logger and its handlers
            log_file: Rotating log file (10 MB, 5 backups), if given
            log_to_console: Attach a stderr handler
            log_format: Record format

        Returns:
            The configured logger
        """
        configured = logging.getLogger(name)
        configured.setLevel(level)
        configured.handlers.clear()

        handlers = []
        if log_to_console:
            handlers.append(logging.StreamHandler(sys.stderr))
        if log_file:
            log_file = Path(log_file)
            log_file.parent.mkdir(parents=True, exist_ok=True)
            handlers.append(
                RotatingFileHandler(log_file, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUPS)
            )

        formatter = logging.Formatter(log_format)
        for handler in handlers:
            handler.setLevel(level)
            handler.setFormatter(formatter)
            configured.addHandler(handler)

        return configured


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """Configure the ``datesynth`` logger"""
    return LoggerConfig.setup_logger(level=level, log_file=log_file)


def write_data(data: pd.DataFrame, filepath: Union[str, Path], **kwargs):
    """Shortcut for :meth:`FileHandler.write_file`"""
    FileHandler.write_file(data, filepath, **kwargs)
