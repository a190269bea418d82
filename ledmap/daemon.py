"""Map daemon: keeps the LED map playing, refreshing forecasts on an interval.

Usage:
    python -m ledmap daemon --config ops/configs/default.yaml
    python -m ledmap daemon --status
    python -m ledmap daemon --stop
"""

import json
import logging
import os
import signal
import sys
import time
from datetime import UTC, datetime
from pathlib import Path

from ledmap.color.reorder import ColorCube
from ledmap.config.loader import config_hash
from ledmap.config.schema import MapConfig
from ledmap.display.strip import LedStrip
from ledmap.pipeline.map_cycle import MapCycle

logger = logging.getLogger(__name__)

PID_DIR = Path("data")
PID_FILE = PID_DIR / "daemon.pid"
STATE_FILE = PID_DIR / "daemon_state.json"
LOG_DIR = Path("logs")
MAX_LOG_FILES = 100
FAILURE_BASE_DELAY = 30  # seconds, doubled per consecutive failure


class MapDaemon:
    """Plays the map in a loop with forecast refresh, backoff and signal handling."""

    def __init__(
        self,
        config: MapConfig,
        strip: LedStrip | None = None,
        cycle: MapCycle | None = None,
    ):
        self.config = config
        self.cycle = cycle if cycle is not None else MapCycle(config, strip=strip)
        self.refresh_interval = config.ops.refresh_interval_minutes * 60
        self.max_backoff = config.ops.max_backoff_seconds
        self._running = False
        self._colors: ColorCube | None = None
        self._colors_fetched_at: float | None = None
        self._consecutive_failures = 0
        self._total_cycles = 0
        self._total_successes = 0
        self._total_failures = 0
        self._total_refreshes = 0
        self._started_at: str | None = None

    def start(self) -> None:
        """Start the daemon loop."""
        self._check_not_already_running()
        self._write_pid()
        self._setup_signals()
        self._running = True
        self._started_at = datetime.now(UTC).isoformat()

        logger.info(
            "Daemon started: %d locations, refresh every %ds, pid=%d",
            len(self.config.enabled_locations()), self.refresh_interval, os.getpid(),
        )
        print(f"LED map daemon started (pid {os.getpid()})")
        print(f"   Logs: {LOG_DIR}/")
        print("   Stop: python -m ledmap daemon --stop")

        try:
            self._loop()
        except KeyboardInterrupt:
            logger.info("Daemon interrupted by keyboard")
        finally:
            self._cleanup()

    def _loop(self) -> None:
        while self._running:
            if self._run_one_cycle():
                self._consecutive_failures = 0
                self._save_state()
                continue

            self._consecutive_failures += 1
            wait = min(
                FAILURE_BASE_DELAY * (2 ** (self._consecutive_failures - 1)),
                self.max_backoff,
            )
            logger.warning(
                "Cycle failed (%d consecutive), backing off %ds",
                self._consecutive_failures, wait,
            )
            self._save_state()

            # Sleep in 1-second increments so we can respond to signals
            sleep_until = time.monotonic() + wait
            while self._running and time.monotonic() < sleep_until:
                time.sleep(1)

    def _refresh_due(self) -> bool:
        if self._colors is None or self._colors_fetched_at is None:
            return True
        return time.monotonic() - self._colors_fetched_at >= self.refresh_interval

    def _run_one_cycle(self) -> bool:
        """Refresh colors if due, then play them once. Returns True on success."""
        self._total_cycles += 1
        timestamp = datetime.now(UTC).strftime("%Y%m%dT%H%M%SZ")

        LOG_DIR.mkdir(parents=True, exist_ok=True)
        log_file = LOG_DIR / f"cycle_{timestamp}.log"

        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        root_logger = logging.getLogger()
        root_logger.addHandler(file_handler)

        try:
            if self._refresh_due():
                logger.info("=== Cycle #%d: refreshing forecast ===", self._total_cycles)
                forecast = self.cycle.fetch_forecast()
                self._colors = self.cycle.compute_colors(forecast)
                self._colors_fetched_at = time.monotonic()
                self._total_refreshes += 1

            assert self._colors is not None
            frames = self.cycle.play(self._colors)
            self._total_successes += 1
            logger.info("Cycle #%d OK: %d frames", self._total_cycles, frames)
            return True

        except Exception:
            self._total_failures += 1
            logger.exception("Cycle #%d failed", self._total_cycles)
            return False

        finally:
            root_logger.removeHandler(file_handler)
            file_handler.close()
            self._rotate_logs()

    def _rotate_logs(self) -> None:
        """Keep only the most recent log files."""
        if not LOG_DIR.exists():
            return
        logs = sorted(LOG_DIR.glob("cycle_*.log"))
        if len(logs) > MAX_LOG_FILES:
            for old in logs[: len(logs) - MAX_LOG_FILES]:
                old.unlink(missing_ok=True)

    def _setup_signals(self) -> None:
        """Handle SIGTERM and SIGINT for graceful shutdown."""
        def _stop(signum: int, frame: object) -> None:
            sig_name = signal.Signals(signum).name
            logger.info("Received %s, shutting down after current cycle", sig_name)
            self._running = False

        signal.signal(signal.SIGTERM, _stop)
        signal.signal(signal.SIGINT, _stop)

    def _check_not_already_running(self) -> None:
        """Prevent duplicate daemons."""
        if PID_FILE.exists():
            try:
                pid = int(PID_FILE.read_text().strip())
                os.kill(pid, 0)
                print(f"Daemon already running (pid {pid}). Stop it first:")
                print("   python -m ledmap daemon --stop")
                sys.exit(1)
            except (ProcessLookupError, ValueError):
                # Stale PID file
                PID_FILE.unlink(missing_ok=True)
            except PermissionError:
                print(f"Daemon may be running (pid {pid}), can't verify.")
                sys.exit(1)

    def _write_pid(self) -> None:
        PID_DIR.mkdir(parents=True, exist_ok=True)
        PID_FILE.write_text(str(os.getpid()))

    def _save_state(self) -> None:
        """Persist daemon stats for status reporting."""
        PID_DIR.mkdir(parents=True, exist_ok=True)
        state = {
            "pid": os.getpid(),
            "started_at": self._started_at,
            "config_hash": config_hash(self.config),
            "refresh_interval": self.refresh_interval,
            "locations": len(self.config.enabled_locations()),
            "total_cycles": self._total_cycles,
            "total_successes": self._total_successes,
            "total_failures": self._total_failures,
            "total_refreshes": self._total_refreshes,
            "consecutive_failures": self._consecutive_failures,
            "last_update": datetime.now(UTC).isoformat(),
        }
        STATE_FILE.write_text(json.dumps(state, indent=2))

    def _cleanup(self) -> None:
        """Remove PID file and release the strip on exit."""
        PID_FILE.unlink(missing_ok=True)
        self.cycle.strip.close()
        self._save_state()
        logger.info(
            "Daemon stopped: %d cycles (%d ok, %d failed)",
            self._total_cycles, self._total_successes, self._total_failures,
        )
        print(
            f"Daemon stopped: {self._total_cycles} cycles "
            f"({self._total_successes} ok, {self._total_failures} failed)"
        )


def stop_daemon() -> int:
    """Stop a running daemon by sending SIGTERM."""
    if not PID_FILE.exists():
        print("No daemon running (no PID file found)")
        return 1

    try:
        pid = int(PID_FILE.read_text().strip())
    except ValueError:
        print("Corrupt PID file, removing")
        PID_FILE.unlink(missing_ok=True)
        return 1

    try:
        os.kill(pid, 0)
    except ProcessLookupError:
        print(f"Daemon not running (stale pid {pid}), cleaning up")
        PID_FILE.unlink(missing_ok=True)
        STATE_FILE.unlink(missing_ok=True)
        return 0

    print(f"Stopping daemon (pid {pid})...")
    os.kill(pid, signal.SIGTERM)

    # A cycle can take minutes to play through; wait up to 5 minutes
    for _ in range(300):
        time.sleep(1)
        try:
            os.kill(pid, 0)
        except ProcessLookupError:
            print("Daemon stopped")
            PID_FILE.unlink(missing_ok=True)
            return 0

    print("Daemon didn't stop in 300s, sending SIGKILL")
    os.kill(pid, signal.SIGKILL)
    PID_FILE.unlink(missing_ok=True)
    return 0


def daemon_status() -> int:
    """Print daemon status from state file."""
    if not STATE_FILE.exists():
        print("No daemon state found")
        if PID_FILE.exists():
            try:
                pid = int(PID_FILE.read_text().strip())
                os.kill(pid, 0)
                print(f"  (but PID file exists: {pid}, process running)")
            except (ProcessLookupError, ValueError):
                print("  (stale PID file found)")
        return 1

    state = json.loads(STATE_FILE.read_text())
    pid = state.get("pid", "?")

    running = False
    try:
        os.kill(int(pid), 0)
        running = True
    except (ProcessLookupError, ValueError, TypeError):
        pass

    print(f"Daemon {'running' if running else 'stopped'}")
    print(f"  PID: {pid}")
    print(f"  Locations: {state.get('locations', '?')}")
    print(f"  Config: {state.get('config_hash', '?')}")
    print(f"  Refresh interval: {state.get('refresh_interval', '?')}s")
    print(f"  Started: {state.get('started_at', '?')}")
    print(f"  Total cycles: {state.get('total_cycles', 0)}")
    print(f"  Successes: {state.get('total_successes', 0)}")
    print(f"  Failures: {state.get('total_failures', 0)}")
    print(f"  Forecast refreshes: {state.get('total_refreshes', 0)}")
    print(f"  Consecutive failures: {state.get('consecutive_failures', 0)}")
    print(f"  Last update: {state.get('last_update', '?')}")
    return 0
