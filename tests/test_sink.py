"""Tests for the metric handles backing the collector."""

import pytest

from core.sink import MetricSink


def test_names_are_namespaced():
    sink = MetricSink("node")
    assert sink.counter("forks_total", "Forks.").name == "node_forks_total"

    bare = MetricSink("")
    assert bare.gauge("procs_running", "Running.").name == "procs_running"


def test_unlabeled_handle_defaults_to_zero():
    sink = MetricSink()
    gauge = sink.gauge("procs_blocked", "Blocked.")
    assert gauge.get() == 0.0

    family = gauge.family()
    assert family.type == "gauge"
    assert [(s.labels, s.value) for s in family.samples] == [({}, 0.0)]


def test_labeled_handle_starts_empty():
    sink = MetricSink()
    counter = sink.counter("cpu_seconds_total", "Cpu.", ["cpu", "mode"])
    assert counter.family().samples == []


def test_set_is_absolute():
    sink = MetricSink()
    counter = sink.counter("intr_total", "Interrupts.")
    counter.set(10)
    counter.set(7)
    assert counter.get() == 7.0


def test_counter_family_samples():
    sink = MetricSink()
    counter = sink.counter("cpu_seconds_total", "Cpu.", ["cpu", "mode"])
    counter.set(2.5, ("cpu1", "user"))
    counter.set(1.0, ("cpu0", "user"))

    family = counter.family()
    assert family.type == "counter"
    assert family.name == "node_cpu_seconds"
    assert [(s.name, s.labels, s.value) for s in family.samples] == [
        ("node_cpu_seconds_total", {"cpu": "cpu0", "mode": "user"}, 1.0),
        ("node_cpu_seconds_total", {"cpu": "cpu1", "mode": "user"}, 2.5),
    ]


def test_wrong_label_count_rejected():
    sink = MetricSink()
    counter = sink.counter("cpu_seconds_total", "Cpu.", ["cpu", "mode"])
    with pytest.raises(ValueError):
        counter.set(1.0, ("cpu0",))


def test_collect_and_describe_cover_every_handle():
    sink = MetricSink()
    sink.counter("ctxt_total", "Ctxt.").set(3)
    sink.gauge("boot_time_seconds", "Boot.")

    assert [f.name for f in sink.collect()] == ["node_ctxt", "node_boot_time_seconds"]
    assert all(not f.samples for f in sink.describe())
