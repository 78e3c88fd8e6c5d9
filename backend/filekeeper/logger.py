import functools
import gzip
import inspect
import logging
import logging.handlers
import os
import shutil
import sys
from gzip import GzipFile
from pathlib import Path
from typing import Callable, ParamSpec, TypeVar

from .config import settings

logger = logging.getLogger("filekeeper")
logger.setLevel(logging.DEBUG)
formatter = logging.Formatter(
    "%(asctime)s %(levelname)s [%(module)s:%(funcName)s:%(lineno)d] %(message)s"
)

logs_dir = Path(settings.logs_dir)
logs_dir.mkdir(parents=True, exist_ok=True)


def rotator(source, dest):
    with open(source, "rb") as f_in:
        with gzip.open(dest + ".gz", "wb") as f_out:
            assert isinstance(f_out, GzipFile)
            shutil.copyfileobj(f_in, f_out)
    os.remove(source)


log_file_handler = logging.handlers.TimedRotatingFileHandler(
    logs_dir / "filekeeper.log", when="midnight"
)
log_file_handler.setFormatter(formatter)
log_file_handler.rotator = rotator
logger.addHandler(log_file_handler)

log_stream_handler = logging.StreamHandler(sys.stdout)
log_stream_handler.setFormatter(formatter)
logger.addHandler(log_stream_handler)


def _describe_call(sig: inspect.Signature, args: tuple, kwargs: dict) -> str:
    """Render the arguments of a failed call as ``[name=value, ...] ``."""
    try:
        bound = sig.bind(*args, **kwargs)
        bound.apply_defaults()
    except TypeError:
        parts = []
        if args:
            parts.append(f"args={args!r}")
        if kwargs:
            parts.append(f"kwargs={kwargs!r}")
        return f"[{', '.join(parts)}] " if parts else ""

    params = ", ".join(f"{k}={v!r}" for k, v in bound.arguments.items())
    return f"[{params}] " if params else ""


P = ParamSpec("P")
R = TypeVar("R")


def log_exception(
    prefix: str = "",
    default_return: R | None = None,
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """
    Decorator for best-effort operations: log any exception and return
    ``default_return`` instead of raising.

    Works for both sync and async callables. Only use it where a failure
    must not reach the caller (e.g. releasing the store on shutdown);
    repository operations propagate their errors.

    Usage:
        @log_exception("Closing store")
        async def close():
            ...
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        sig = inspect.signature(func)
        prefix_str = f"{prefix}: " if prefix else ""

        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
                try:
                    return await func(*args, **kwargs)
                except Exception as e:
                    logger.error(
                        f"{_describe_call(sig, args, kwargs)}{prefix_str}"
                        f"{type(e).__name__}: {e}",
                        exc_info=True,
                        stacklevel=2,
                    )
                    return default_return  # type: ignore[return-value]

            return async_wrapper  # type: ignore[return-value]

        @functools.wraps(func)
        def sync_wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            try:
                return func(*args, **kwargs)
            except Exception as e:
                logger.error(
                    f"{_describe_call(sig, args, kwargs)}{prefix_str}"
                    f"{type(e).__name__}: {e}",
                    exc_info=True,
                    stacklevel=2,
                )
                return default_return  # type: ignore[return-value]

        return sync_wrapper  # type: ignore[return-value]

    return decorator
