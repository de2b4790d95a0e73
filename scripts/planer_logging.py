import logging
import os


def setup_planer_logging(name: str, log_level=logging.INFO, log_dir=None):
    """
    Sets up logging for a sticker planer run.

    Args:
        name (str): Logger name; also the log file stem.
        log_level (int): Level for the logger and the file handler.
        log_dir (str): Directory for `<name>.log`. No file is written when empty.
    """
    logger = logging.getLogger(name)
    logger.setLevel(log_level)

    # Prevent adding multiple handlers if already set up
    if not logger.handlers:
        formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
            fh = logging.FileHandler(os.path.join(log_dir, f"{name}.log"))
            fh.setLevel(log_level)
            fh.setFormatter(formatter)
            logger.addHandler(fh)

        # Console only shows warnings/errors; stdout carries the JSON summary
        ch = logging.StreamHandler()
        ch.setLevel(logging.WARNING)
        ch.setFormatter(formatter)
        logger.addHandler(ch)

    return logger
