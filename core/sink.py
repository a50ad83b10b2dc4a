from prometheus_client.core import CounterMetricFamily, GaugeMetricFamily


class _Handle:
    family_class = None

    def __init__(self, name, documentation, label_names=()):
        self.name = name
        self.documentation = documentation
        self.label_names = tuple(label_names)
        self._values = {}  # { label_values: value }

        # 无 label 的指标默认导出 0，和 prometheus_client 的 Counter/Gauge 一致
        if not self.label_names:
            self._values[()] = 0.0

    def set(self, value, labels=()):
        labels = tuple(labels)
        if len(labels) != len(self.label_names):
            raise ValueError(
                f"{self.name}: expected labels {self.label_names}, got {labels}"
            )
        self._values[labels] = float(value)

    def get(self, labels=()):
        return self._values.get(tuple(labels))

    def family(self, with_samples=True):
        metric = self.family_class(
            self.name,
            self.documentation,
            labels=list(self.label_names),
        )
        if with_samples:
            for labels, value in sorted(self._values.items()):
                metric.add_metric(list(labels), value)
        return metric


class CounterHandle(_Handle):
    """Cumulative value, set absolutely rather than incremented."""

    family_class = CounterMetricFamily


class GaugeHandle(_Handle):
    family_class = GaugeMetricFamily


class MetricSink:
    """
    Holds metric handles with a fixed identity and turns their current
    values into prometheus_client metric families on demand.
    """

    def __init__(self, namespace="node"):
        self.namespace = namespace
        self._handles = []

    def full_name(self, name):
        return f"{self.namespace}_{name}" if self.namespace else name

    def counter(self, name, documentation, label_names=()):
        handle = CounterHandle(self.full_name(name), documentation, label_names)
        self._handles.append(handle)
        return handle

    def gauge(self, name, documentation, label_names=()):
        handle = GaugeHandle(self.full_name(name), documentation, label_names)
        self._handles.append(handle)
        return handle

    def collect(self):
        for handle in self._handles:
            yield handle.family()

    def describe(self):
        for handle in self._handles:
            yield handle.family(with_samples=False)
