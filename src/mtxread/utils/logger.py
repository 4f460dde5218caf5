import logging
import os

LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def setup_logger(
    name: str = "mtxread",
    log_file: str = None,
    level: str = "INFO",
    log_to_console: bool = True,
) -> logging.Logger:
    """
    Sets up a logger with options to log to a file and/or the console.

    Console logging is filtered by the provided level, but all logs are saved to the file.

    Args:
        name (str): Name of the logger. The parser modules log to "mtxread".
        log_file (str, optional): Path to the log file. If None, no file logging is set up.
        level (str): Logging level for console output. One of ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"].
        log_to_console (bool): If True, log messages will be printed to the console.

    Returns:
        logging.Logger: Configured logger.
    """
    if level.upper() not in LEVELS:
        raise ValueError(f"Unknown log level {level!r}, expected one of {LEVELS}")

    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)

    # Ensure no duplicate handlers are added
    if not logger.handlers:
        formatter = logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

        if log_to_console:
            console_handler = logging.StreamHandler()
            console_handler.setLevel(level.upper())
            console_handler.setFormatter(formatter)
            logger.addHandler(console_handler)

        if log_file:
            log_dir = os.path.dirname(log_file)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
            file_handler = logging.FileHandler(log_file)
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    return logger
