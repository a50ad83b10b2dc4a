from prometheus_client import REGISTRY
from collector.stat.stat_collector_linux import StatCollector
from core.config import settings


def build_registry(settings, registry=REGISTRY, clock_ticks=None):
    registry.register(
        StatCollector(
            proc_path=settings.PROC_PATH,
            clock_ticks=clock_ticks,
            namespace=settings.NAMESPACE,
        )
    )
    return registry


register = build_registry(settings)
