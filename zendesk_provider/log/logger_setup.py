import sys

import loguru
from loguru import logger

from zendesk_provider.config.settings import LogLevelType
from zendesk_provider.log.sensetive import sensitive_log_filter

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<level>{message}</level>"
)


def setup_logger(level: LogLevelType, *sensitive_strings: str) -> None:
    """
    Routes logs to stderr, stdout only carries command output such as plans and
    schema dumps. Every string given here is masked from then on.
    """
    logger.remove()
    sensitive_log_filter.hide_sensitive_strings(*sensitive_strings)
    logger.add(
        sys.stderr,
        level=level.upper(),
        format=_formatter(level),
        diagnose=False,  # hide variable values in log backtrace
        filter=sensitive_log_filter.create_filter(),
    )
    logger.configure(patcher=exception_deserializer)


def _formatter(level: LogLevelType) -> "loguru.FormatFunction":
    def _format(record: "loguru.Record") -> str:
        # request ids and addresses bound to the record only matter when debugging
        if level == "DEBUG" and record["extra"]:
            return LOG_FORMAT + " | {extra}\n{exception}"
        return LOG_FORMAT + "\n{exception}"

    return _format


def exception_deserializer(record: "loguru.Record") -> None:
    """
    Workaround for when trying to log exception objects with loguru.
    Loguru doesn't able to deserialize `Exception` subclasses.
    https://github.com/Delgan/loguru/issues/504#issuecomment-917365972
    """
    exception: loguru.RecordException | None = record["exception"]
    if exception is not None:
        fixed = Exception(str(exception.value))
        record["exception"] = exception._replace(value=fixed)
