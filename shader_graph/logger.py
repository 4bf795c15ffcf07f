import logging
import sys

# Centralized logger name; module loggers (shader_graph.*) are separate and
# carry debug traces only
LOGGER_NAME = "ShaderGraph"

# Format: [ShaderGraph] [Level] Message
LOG_FORMAT = f'[{LOGGER_NAME}] [%(levelname)s] %(message)s'


def get_logger() -> logging.Logger:
    """Logger that receives every recorded compile diagnostic."""
    return logging.getLogger(LOGGER_NAME)


def setup_logger(level=logging.INFO, stream=None):
    """
    Attach a single stream handler to the Shader Graph logger.

    Args:
        level: Logging level (default: INFO)
        stream: Output stream (default: stdout)

    Calling it again replaces the previous handler.
    """
    logger = get_logger()
    logger.setLevel(level)
    logger.handlers.clear()

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)

    return logger


def log_warning(msg: str):
    get_logger().warning(msg)


def log_error(msg: str):
    get_logger().error(msg)
