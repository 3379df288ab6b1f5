"""Call-timing instrumentation.

Methods are opted in with `@profiled`; `Profiler.wrap` returns a proxy that
times those methods and forwards everything else untouched. The wrapped
object never knows it is being profiled.
"""
import functools
import threading
import time
from datetime import datetime, timezone
from typing import Callable, Dict, TextIO

from wordcrawl.utils.datetime_utils import format_duration, format_rfc1123

_PROFILED_ATTR = "__wordcrawl_profiled__"


def profiled(method):
    """Mark `method` for timing by `Profiler.wrap`."""
    setattr(method, _PROFILED_ATTR, True)
    return method


def _is_profiled(func) -> bool:
    return bool(getattr(func, _PROFILED_ATTR, False))


class ProfilingState:
    """Thread-safe total elapsed time per `ClassName#method`."""

    def __init__(self):
        self._lock = threading.Lock()
        self._totals: Dict[str, float] = {}

    def record(self, cls: type, method_name: str, elapsed_seconds: float) -> None:
        if elapsed_seconds < 0:
            raise ValueError("elapsed time cannot be negative")
        key = f"{cls.__name__}#{method_name}"
        with self._lock:
            self._totals[key] = self._totals.get(key, 0.0) + elapsed_seconds

    def totals(self) -> Dict[str, float]:
        with self._lock:
            return dict(self._totals)

    def write(self, stream: TextIO) -> None:
        for key, elapsed in sorted(self.totals().items()):
            stream.write(f"{key} took {format_duration(elapsed)}\n")


class _ProfilingProxy:
    def __init__(self, delegate, state: ProfilingState, clock: Callable[[], float]):
        object.__setattr__(self, "_delegate", delegate)
        object.__setattr__(self, "_state", state)
        object.__setattr__(self, "_clock", clock)

    def __getattr__(self, name):
        attr = getattr(self._delegate, name)
        class_attr = getattr(type(self._delegate), name, None)
        if not callable(attr) or not _is_profiled(class_attr):
            return attr

        delegate, state, clock = self._delegate, self._state, self._clock

        @functools.wraps(attr)
        def timed(*args, **kwargs):
            start = clock()
            try:
                return attr(*args, **kwargs)
            finally:
                state.record(type(delegate), name, clock() - start)

        return timed

    def __setattr__(self, name, value):
        setattr(self._delegate, name, value)

    def __repr__(self):
        return f"<profiled {self._delegate!r}>"


class Profiler:
    def __init__(self, clock: Callable[[], float] = time.perf_counter, now: Callable[[], datetime] = None):
        self.clock = clock
        self.state = ProfilingState()
        self.started_at = (now or (lambda: datetime.now(timezone.utc)))()

    def wrap(self, delegate):
        """Return a proxy for `delegate` that times its `@profiled` methods.

        Raises ValueError if the delegate's class has no profiled method.
        """
        cls = type(delegate)
        if not any(_is_profiled(getattr(cls, n, None)) for n in dir(cls)):
            raise ValueError(f"{cls.__name__} has no @profiled method")
        return _ProfilingProxy(delegate, self.state, self.clock)

    def write_data(self, path: str) -> None:
        """Append profile data to `path`, creating the file if needed."""
        with open(path, "a", encoding="utf-8") as f:
            self.write_data_to(f)

    def write_data_to(self, stream: TextIO) -> None:
        stream.write(f"Run at {format_rfc1123(self.started_at)}\n")
        self.state.write(stream)
        stream.write("\n")
