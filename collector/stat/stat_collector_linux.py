import logging
import os
import threading
import time

from prometheus_client.core import GaugeMetricFamily

from core.errors import MalformedRecord, SourceUnavailable, StatError
from core.sink import MetricSink
from core.sysconf import clock_ticks_per_second

logger = logging.getLogger(__name__)

# /proc/stat 中 cpuN 行的字段顺序，旧内核 / OpenVZ 可能缺少末尾字段
CPU_MODES = [
    "user",
    "nice",
    "system",
    "idle",
    "iowait",
    "irq",
    "softirq",
    "steal",
    "guest",
]


class StatCollector:
    """
    Exposes cpu times, interrupts, context switches, forks, boot time and
    process counts from /proc/stat.

    Every collection re-reads the whole file. Values are staged while
    parsing and only written to the metric handles once the file parsed
    cleanly, so a failed read never leaves a half-updated set behind.
    """

    def __init__(self, proc_path="/proc", clock_ticks=None, namespace="node"):
        self.path = os.path.join(proc_path, "stat")
        self._clock_ticks = clock_ticks
        self._lock = threading.Lock()

        self._sink = MetricSink(namespace)
        self.cpu = self._sink.counter(
            "cpu_seconds_total",
            "Seconds the CPUs spent in each mode.",
            ["cpu", "mode"],
        )
        self.intr = self._sink.counter(
            "intr_total",
            "Total number of interrupts serviced.",
        )
        self.ctxt = self._sink.counter(
            "context_switches_total",
            "Total number of context switches.",
        )
        self.forks = self._sink.counter(
            "forks_total",
            "Total number of forks.",
        )
        self.btime = self._sink.gauge(
            "boot_time_seconds",
            "Node boot time, in unixtime.",
        )
        self.procs_running = self._sink.gauge(
            "procs_running",
            "Number of processes in runnable state.",
        )
        self.procs_blocked = self._sink.gauge(
            "procs_blocked",
            "Number of processes blocked waiting for I/O to complete.",
        )

        self._scalars = {
            "intr": self.intr,
            "ctxt": self.ctxt,
            "processes": self.forks,
            "btime": self.btime,
            "procs_running": self.procs_running,
            "procs_blocked": self.procs_blocked,
        }

    @property
    def clock_ticks(self):
        if self._clock_ticks is None:
            self._clock_ticks = clock_ticks_per_second()
        return self._clock_ticks

    def update(self):
        """Run one collection cycle. Raises StatError on failure."""
        with self._lock:
            self._update()

    def _update(self):
        ticks = self.clock_ticks
        staged = self.read_stat(ticks)

        for handle, labels, value in staged:
            handle.set(value, labels)

        logger.debug("%s: committed %d values", self.path, len(staged))

    def read_stat(self, ticks):
        staged = []  # [ (handle, labels, value) ]

        try:
            with open(self.path, "rb") as f:
                for line_no, raw in enumerate(f, 1):
                    parts = decode_line(raw, line_no).split()
                    if not parts:
                        continue

                    key = parts[0]

                    if key.startswith("cpu"):
                        # 只导出 per-cpu，聚合交给 Prometheus
                        if key == "cpu":
                            continue

                        for mode, value in zip(CPU_MODES, parts[1:]):
                            seconds = parse_value(key, value, line_no) / ticks
                            staged.append((self.cpu, (key, mode), seconds))

                    elif key in self._scalars:
                        # intr 只取总数，后面是每个中断号的计数
                        value = parts[1] if len(parts) > 1 else ""
                        staged.append(
                            (self._scalars[key], (), parse_value(key, value, line_no))
                        )
        except OSError as e:
            raise SourceUnavailable.from_os_error(self.path, e) from e

        return staged

    def describe(self):
        yield from self._sink.describe()
        yield from self._scrape_metrics()

    def collect(self):
        start = time.perf_counter()

        with self._lock:
            try:
                self._update()
            except StatError as e:
                logger.error("stat collector failed: %s", e)
                families = []
                success = 0
            else:
                families = list(self._sink.collect())
                success = 1

        duration = time.perf_counter() - start

        yield from families
        yield from self._scrape_metrics(duration, success)

    def _scrape_metrics(self, duration=None, success=None):
        duration_metric = GaugeMetricFamily(
            self._sink.full_name("scrape_collector_duration_seconds"),
            "Duration of a collector scrape.",
            labels=["collector"],
        )
        success_metric = GaugeMetricFamily(
            self._sink.full_name("scrape_collector_success"),
            "Whether a collector succeeded.",
            labels=["collector"],
        )

        if duration is not None:
            duration_metric.add_metric(["stat"], duration)
            success_metric.add_metric(["stat"], success)

        yield duration_metric
        yield success_metric


def decode_line(raw, line_no):
    try:
        return raw.decode("ascii")
    except UnicodeDecodeError:
        keyword = raw.split()[0].decode("ascii", "replace")
        raise MalformedRecord(keyword, raw.strip(), line_no) from None


def parse_value(keyword, token, line_no):
    # float() 接受 "1_000"，内核不会输出这种格式
    if "_" in token:
        raise MalformedRecord(keyword, token, line_no)
    try:
        return float(token)
    except ValueError:
        raise MalformedRecord(keyword, token, line_no) from None
