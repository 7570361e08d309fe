import logging, json, sys, time, os


class JsonLineFormatter(logging.Formatter):
    """One JSON object per record; messages with quotes or newlines stay valid JSON."""

    converter = time.gmtime

    def __init__(self):
        super().__init__(datefmt="%Y-%m-%dT%H:%M:%SZ")

    def format(self, record):
        line = {
            "ts": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "name": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            line["exc"] = self.formatException(record.exc_info)
        return json.dumps(line)


def get_logger(name="aptkey", level=None, to_file=None):
    """Structured logger shared by the provider, command runner and key sources.

    ``level`` falls back to ``APTKEY_LOG_LEVEL`` and ``to_file`` to
    ``APTKEY_LOG_FILE``. Handlers are attached on first use only.
    """
    logger = logging.getLogger(name)
    if level is None:
        level = os.getenv("APTKEY_LOG_LEVEL", "INFO").upper()
    logger.setLevel(level)

    if not logger.handlers:
        formatter = JsonLineFormatter()
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

        to_file = to_file or os.getenv("APTKEY_LOG_FILE")
        if to_file:
            os.makedirs(os.path.dirname(to_file) or ".", exist_ok=True)
            file_handler = logging.FileHandler(to_file)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    return logger
