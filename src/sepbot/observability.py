"""Observability utilities.

Provides leveled, key=value logging to stderr and LangSmith tracing for the
processing graph nodes.
"""

import functools
import sys
import time
from typing import Any, Callable, TypeVar

from langsmith import traceable

F = TypeVar("F", bound=Callable[..., Any])

# Level name -> (severity, prefix)
_LEVELS = {
    "debug": (10, "🔍"),
    "info": (20, "ℹ️"),
    "start": (20, "🚀"),
    "success": (20, "✅"),
    "warning": (30, "⚠️"),
    "error": (40, "❌"),
    "fatal": (50, "💥"),
}

_min_severity = _LEVELS["info"][0]


def configure_logging(level: str) -> None:
    """Set the minimum level that gets written (debug, info, warning, error)."""
    global _min_severity
    level = level.lower()
    if level == "warn":
        level = "warning"
    _min_severity = _LEVELS.get(level, _LEVELS["info"])[0]


def _log(message: str, level: str = "info", component: str = "sepbot") -> None:
    """Log message to stderr for GitHub Actions visibility."""
    severity, prefix = _LEVELS.get(level, _LEVELS["info"])
    if severity < _min_severity:
        return
    print(f"{prefix} [{component}] {message}", file=sys.stderr, flush=True)


def log_event(component: str, event: str, level: str = "info", **data: Any) -> None:
    """Log an event with structured context.

    Args:
        component: Component name (e.g. "ping", "detector").
        event: Event description.
        level: Log level (debug, info, success, warning, error, fatal).
        **data: Additional data to log.

    Example:
        log_event("ping", "Pinged author", item=42, author="octocat")
    """
    if data:
        data_str = ", ".join(f"{k}={v}" for k, v in data.items())
        _log(f"{event} ({data_str})", level, component)
    else:
        _log(event, level, component)


def traced_node(
    name: str,
    *,
    run_type: str = "chain",
    log_output: bool = True,
) -> Callable[[F], F]:
    """Decorator to add tracing and logging to a LangGraph node.

    Combines LangSmith tracing with timing and logging for observability.

    Args:
        name: Name for the trace (e.g., "intake", "staleness").
        run_type: LangSmith run type ("chain", "llm", "tool").
        log_output: Whether to log output keys.
    """

    def decorator(func: F) -> F:
        traced_func = traceable(name=name, run_type=run_type)(func)

        @functools.wraps(func)
        def wrapper(state: dict, *args: Any, **kwargs: Any) -> dict:
            item = state.get("item")
            number = getattr(item, "number", None)
            _log(f"Starting #{number}", "debug", name)

            start_time = time.perf_counter()

            try:
                result = traced_func(state, *args, **kwargs)

                elapsed = time.perf_counter() - start_time
                elapsed_str = (
                    f"{elapsed:.2f}s" if elapsed >= 1 else f"{elapsed * 1000:.0f}ms"
                )

                if log_output and isinstance(result, dict):
                    _log(
                        f"Completed #{number} in {elapsed_str}, output: {list(result.keys())}",
                        "debug",
                        name,
                    )
                else:
                    _log(f"Completed #{number} in {elapsed_str}", "debug", name)

                return result

            except Exception as e:
                elapsed = time.perf_counter() - start_time
                _log(f"Failed #{number} after {elapsed:.2f}s: {e}", "error", name)
                raise

        return wrapper  # type: ignore

    return decorator
