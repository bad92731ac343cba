import os
from typing import Any

from hypothesis import HealthCheck, settings

settings.register_profile(
    "ci", max_examples=200, suppress_health_check=[HealthCheck.too_slow]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "default"))

# Start coverage in subprocesses spawned by the CLI tests
if os.getenv("COVERAGE_PROCESS_START"):
    import coverage

    coverage.process_startup()

    # Collector.stop can fail at subprocess teardown when it is not the
    # innermost collector
    import coverage.collector

    def safe_stop(self: Any) -> None:
        if self in getattr(self, "_collectors", []):
            self._collectors.remove(self)

    coverage.collector.Collector.stop = safe_stop
