"""structlog configuration with console and append-only JSON file sinks."""

import logging
import queue
import sys
from dataclasses import dataclass
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path

import structlog

from calculator.config import Settings

ERROR_LOG_FILE = "error.log"
COMBINED_LOG_FILE = "combined.log"
EXCEPTIONS_LOG_FILE = "exceptions.log"


class EventQueueHandler(QueueHandler):
    """Queue handler that hands records over unformatted.

    The stock handler formats records before enqueueing, which would flatten
    structlog event dicts before the file formatters see them.
    """

    def prepare(self, record: logging.LogRecord) -> logging.LogRecord:
        return record


class ExceptionRecordFilter(logging.Filter):
    """Pass only records that carry exception information.

    structlog keeps ``exc_info`` inside the event dict, so both places are
    checked.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.exc_info:
            return True
        return isinstance(record.msg, dict) and bool(record.msg.get("exc_info"))


@dataclass
class LogSinks:
    """File sinks fed through a queue, owned by the application lifespan.

    Attributes:
        listener: Thread draining the queue into the file handlers.
        queue_handler: Root handler feeding the queue.
    """

    listener: QueueListener
    queue_handler: QueueHandler

    @property
    def handlers(self) -> tuple[logging.Handler, ...]:
        return self.listener.handlers

    def start(self) -> None:
        self.listener.start()

    def close(self) -> None:
        """Flush queued records, close the files and detach from the root logger."""
        logging.getLogger().removeHandler(self.queue_handler)
        self.listener.stop()
        for handler in self.listener.handlers:
            handler.close()


def add_service_name(service: str) -> structlog.typing.Processor:
    """Build a processor that stamps every event with the service name."""

    def processor(logger, method_name, event_dict):
        event_dict.setdefault("service", service)
        return event_dict

    return processor


def shared_processors(settings: Settings) -> list[structlog.typing.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        add_service_name(settings.SERVICE_NAME),
        structlog.processors.StackInfoRenderer(),
    ]


def build_file_handlers(log_dir: Path, formatter: logging.Formatter) -> list[logging.Handler]:
    """Create the error, exceptions and combined log file handlers.

    Args:
        log_dir: Directory for log files; created if missing.
        formatter: Formatter rendering JSON lines.

    Returns:
        Handlers for ``error.log`` (ERROR and above), ``exceptions.log``
        (records with exception info) and ``combined.log``.
    """
    log_dir.mkdir(parents=True, exist_ok=True)

    error_handler = logging.FileHandler(log_dir / ERROR_LOG_FILE, mode="a", encoding="utf-8")
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(formatter)

    exceptions_handler = logging.FileHandler(
        log_dir / EXCEPTIONS_LOG_FILE, mode="a", encoding="utf-8"
    )
    exceptions_handler.addFilter(ExceptionRecordFilter())
    exceptions_handler.setFormatter(formatter)

    combined_handler = logging.FileHandler(log_dir / COMBINED_LOG_FILE, mode="a", encoding="utf-8")
    combined_handler.setFormatter(formatter)

    return [error_handler, exceptions_handler, combined_handler]


def configure_logging(settings: Settings) -> LogSinks | None:
    """Route structlog through stdlib logging to the console and log files.

    File handlers sit behind a queue so request handlers never block on
    disk writes. The caller owns the returned sinks and must start and
    close them.

    Args:
        settings: Application settings.

    Returns:
        LogSinks wrapping the file handlers, or None when file logging is
        disabled.
    """
    pre_chain = shared_processors(settings)

    structlog.configure(
        processors=pre_chain + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    if settings.LOG_JSON_CONSOLE:
        console_renderers = [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        console_renderers = [structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())]

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *console_renderers,
            ],
        )
    )

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.addHandler(console_handler)
    root.setLevel(settings.LOG_LEVEL.upper())

    if not settings.LOG_TO_FILES:
        return None

    json_formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=pre_chain,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ],
    )
    file_handlers = build_file_handlers(Path(settings.LOG_DIR), json_formatter)

    log_queue: queue.Queue = queue.Queue(-1)
    queue_handler = EventQueueHandler(log_queue)
    root.addHandler(queue_handler)
    listener = QueueListener(log_queue, *file_handlers, respect_handler_level=True)
    return LogSinks(listener=listener, queue_handler=queue_handler)


def get_logger(name: str = "calculator") -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
