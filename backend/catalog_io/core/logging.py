import logging
import sys
import structlog

def configure_logging(env: str = "dev", level: str | None = None) -> None:
    """Structlog over stdlib logging.

    Context bound with ``structlog.contextvars.bind_contextvars`` (the worker
    binds ``import_run_id``) is merged into every event of the job.
    """
    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if env == "prod":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())

    structlog.configure(
        processors=shared_processors + [renderer],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level or ("DEBUG" if env == "dev" else "INFO"),
    )
    # per-row decode events are DEBUG; keep the SQL echo out of them
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

logger = structlog.get_logger()
