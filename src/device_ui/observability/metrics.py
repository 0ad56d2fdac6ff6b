import threading

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr


class RuntimeMetrics(BaseModel):
    model_config = ConfigDict(extra="forbid")

    counters: dict[str, int] = Field(
        default_factory=dict, description="Named counters for runtime outcomes."
    )

    _lock: threading.Lock = PrivateAttr(default_factory=threading.Lock)

    def inc(self, key: str, n: int = 1) -> None:
        # Incremented from both the reader loop and the scheduler thread.
        with self._lock:
            self.counters[key] = int(self.counters.get(key, 0)) + n

    def get(self, key: str) -> int:
        return int(self.counters.get(key, 0))

    @property
    def degraded(self) -> bool:
        """True once any snapshot had to be dropped for size."""
        return self.get("snapshots.overflow") > 0

    def summary(self) -> dict[str, int]:
        with self._lock:
            return {k: self.counters[k] for k in sorted(self.counters)}
