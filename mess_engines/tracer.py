"""
mess_engines.tracer -- Engine invocation tracer emitting MESS_ENGINE_TRACE.

Responsibility:
    ``@traced_engine`` wraps a pure engine function and, after each call,
    logs one MESS_ENGINE_TRACE record naming the engine, its version, a
    fingerprint of the selected inputs and the call duration.  Two calls
    with the same fingerprint saw the same inputs.

Architecture position:
    Engines -- infrastructure support for the pure calculation layer.
    Emits a log record only; adds no I/O to the engines.

Invariants enforced:
    - Fingerprints are deterministic: mapping keys are sorted, sequence
      order is kept, Decimals are normalized (``1.5`` and ``1.50`` agree)
      and dataclasses are reduced to their fields.
    - Inputs are read, never mutated.  A one-shot iterator passed as a
      fingerprinted argument is drawn into a tuple first, and the engine
      receives that tuple, so hashing never consumes what the engine reads.

Usage:
    from mess_engines.tracer import traced_engine

    @traced_engine("summary", "1.0", fingerprint_fields=("items",))
    def summarize(items):
        ...
"""

from __future__ import annotations

import dataclasses
import functools
import hashlib
import inspect
import json
import logging
import time
from collections.abc import Callable, Iterable, Iterator, Mapping, Set
from decimal import Decimal
from enum import Enum
from typing import Any

_logger = logging.getLogger("mess_kernel.engines.tracer")


def _canonical(value: Any) -> Any:
    """Reduce ``value`` to JSON-serializable data with a stable form."""
    if value is None or isinstance(value, (bool, int, str)):
        return value
    if isinstance(value, Decimal):
        return str(value.normalize())
    if isinstance(value, Enum):
        return _canonical(value.value)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            f.name: _canonical(getattr(value, f.name))
            for f in dataclasses.fields(value)
        }
    if isinstance(value, Mapping):
        return {str(k): _canonical(v) for k, v in value.items()}
    if isinstance(value, Set):
        return sorted((_canonical(v) for v in value), key=repr)
    if isinstance(value, float):
        return repr(value)
    if isinstance(value, Iterator):
        raise TypeError(f"cannot fingerprint a one-shot iterator: {type(value).__name__}")
    if isinstance(value, Iterable) and not isinstance(value, bytes):
        return [_canonical(v) for v in value]
    return str(value)


def compute_input_fingerprint(
    fingerprint_fields: tuple[str, ...],
    arguments: Mapping[str, Any],
) -> str:
    """
    First 16 hex chars of the SHA-256 of the selected arguments.

    Fields absent from ``arguments`` are hashed as null.  Any iterable
    that is not a one-shot iterator is hashed as the sequence it yields;
    sets are hashed sorted.  Iterators raise TypeError.
    """
    selected = {name: _canonical(arguments.get(name)) for name in fingerprint_fields}
    canonical = json.dumps(selected, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()[:16]


def traced_engine(
    engine_name: str,
    engine_version: str,
    fingerprint_fields: tuple[str, ...] = (),
) -> Callable:
    """
    Decorator that emits MESS_ENGINE_TRACE for each engine call.

    Args:
        engine_name: Engine identifier, e.g. "summary".
        engine_version: Version of the engine's formulas, e.g. "1.0".
        fingerprint_fields: Parameter names to fingerprint.  Positional
            and keyword arguments are both matched by name.
    """

    def decorator(func: Callable) -> Callable:
        signature = inspect.signature(func)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            fingerprint = ""
            if fingerprint_fields:
                bound = signature.bind_partial(*args, **kwargs)
                for name in fingerprint_fields:
                    if isinstance(bound.arguments.get(name), Iterator):
                        bound.arguments[name] = tuple(bound.arguments[name])
                fingerprint = compute_input_fingerprint(fingerprint_fields, bound.arguments)
                args, kwargs = bound.args, bound.kwargs

            started = time.monotonic()
            result = func(*args, **kwargs)
            elapsed_ms = round((time.monotonic() - started) * 1000, 2)

            _logger.debug("MESS_ENGINE_TRACE", extra={
                "trace_type": "MESS_ENGINE_TRACE",
                "engine_name": engine_name,
                "engine_version": engine_version,
                "input_fingerprint": fingerprint,
                "duration_ms": elapsed_ms,
                "function": func.__qualname__,
            })
            return result

        return wrapper

    return decorator
