import inspect
import json
import time
from datetime import UTC, datetime
from enum import Enum
from functools import wraps

import numpy as np

try:
    import polars as pl  # optional
except Exception:  # ModuleNotFoundError, etc.
    pl = None

_EVENT_FIELDS = ("version", "ts_utc", "mono_ns", "op")


class History:
    # History and Timeline

    # Mutating methods to wrap. Subclasses extend this if they add mutators.
    _HISTORY_MUTATORS = ()

    def _init_history(self, enabled=True):
        self._history_enabled = bool(enabled)
        self._history = []  # list[dict]
        self._version = 0
        self._history_clock0 = time.perf_counter_ns()
        self._install_history_hooks()  # wrap mutating methods

    def _utcnow_iso(self) -> str:
        return datetime.now(UTC).isoformat(timespec="microseconds").replace("+00:00", "Z")

    def _jsonify(self, x):
        # Make args/return JSON-safe & compact.

        if x is None or isinstance(x, (bool, int, float, str)):
            return x
        if isinstance(x, Enum):
            return x.name
        if isinstance(x, (set, frozenset)):
            return sorted(self._jsonify(v) for v in x)
        if isinstance(x, (list, tuple)):
            return [self._jsonify(v) for v in x]
        if isinstance(x, dict):
            return {str(k): self._jsonify(v) for k, v in x.items()}
        # NumPy scalars
        if isinstance(x, (np.generic,)):
            return x.item()
        if isinstance(x, np.ndarray):
            return x.tolist()
        # anything heavier -> just a tag
        t = type(x).__name__
        return f"<<{t}>>"

    def _log_event(self, op: str, **fields):
        if not self._history_enabled:
            return
        self._version += 1
        evt = {
            "version": self._version,
            "ts_utc": self._utcnow_iso(),  # ISO-8601 with Z
            "mono_ns": time.perf_counter_ns() - self._history_clock0,
            "op": op,
        }
        # sanitize
        for k, v in fields.items():
            evt[k] = self._jsonify(v)
        self._history.append(evt)

    def _log_mutation(self, name=None):
        def deco(fn):
            op = name or fn.__name__
            sig = inspect.signature(fn)

            @wraps(fn)
            def wrapper(*args, **kwargs):
                bound = sig.bind(*args, **kwargs)
                bound.apply_defaults()
                result = fn(*args, **kwargs)
                payload = {}
                # record all call args except 'self'
                for k, v in bound.arguments.items():
                    if k != "self":
                        payload[k] = v
                payload["result"] = result
                self._log_event(op, **payload)
                return result

            return wrapper

        return deco

    def _install_history_hooks(self):
        for name in self._HISTORY_MUTATORS:
            if hasattr(self, name):
                fn = getattr(self, name)
                # Avoid double-wrapping
                if getattr(fn, "__wrapped__", None) is None:
                    setattr(self, name, self._log_mutation(name)(fn))

    def history(self, as_df: bool = False):
        """Return the append-only mutation history.

        Parameters
        --
        as_df : bool, default False
            If True, return a Polars DF [DataFrame]; otherwise return a list of dicts.

        Returns
        ---
        list[dict] or polars.DataFrame
            Each event includes: 'version', 'ts_utc' (UTC ISO-8601), 'mono_ns'
            (monotonic nanoseconds since logger start), 'op', call snapshot fields,
            and 'result'.

        Notes
        -
        Ordering is guaranteed by 'version' and 'mono_ns'. The log is in-memory until exported.
        Events of different ops carry different fields; the DataFrame fills gaps with nulls.

        """
        if as_df:
            if pl is None:
                raise RuntimeError("Cannot return history as DataFrame: install polars.")
            return pl.DataFrame(self._history_rows(), infer_schema_length=None)
        return list(self._history)

    def _history_rows(self):
        # polars wants one dtype per column; payloads can mix ints, names and dicts
        rows = []
        for evt in self._history:
            row = {}
            for k, v in evt.items():
                if k in _EVENT_FIELDS or v is None:
                    row[k] = v
                else:
                    row[k] = json.dumps(v, ensure_ascii=False)
            rows.append(row)
        return rows

    def export_history(self, path: str):
        """Write the mutation history to disk.

        Parameters
        --
        path : str
            Output path. Supported extensions: '.parquet', '.ndjson' (a.k.a. '.jsonl'),
            '.json', '.csv'. Unknown extensions default to Parquet by appending '.parquet'.

        Returns
        ---
        int
            Number of events written. Returns 0 if the history is empty.

        """
        if not self._history:
            return 0
        path = str(path)
        p = path.lower()
        if p.endswith(".ndjson") or p.endswith(".jsonl"):
            with open(path, "w", encoding="utf-8") as f:
                for r in self._history:
                    f.write(json.dumps(r, ensure_ascii=False) + "\n")
            return len(self._history)
        if p.endswith(".json"):
            with open(path, "w", encoding="utf-8") as f:
                json.dump(self._history, f, ensure_ascii=False)
            return len(self._history)
        df = self.history(as_df=True)
        if p.endswith(".csv"):
            df.write_csv(path)
            return len(df)
        if p.endswith(".parquet"):
            df.write_parquet(path)
            return len(df)
        # Default to Parquet if unknown
        df.write_parquet(path + ".parquet")
        return len(df)

    def enable_history(self, flag: bool = True):
        """Enable or disable in-memory mutation logging."""
        self._history_enabled = bool(flag)

    def clear_history(self):
        """Clear the in-memory mutation log.

        Notes
        -
        This does not delete any files previously exported.

        """
        self._history.clear()

    def mark(self, label: str):
        """Insert a manual marker ('op'='mark') into the mutation history."""
        self._log_event("mark", label=label)
