"""
Snapshot assembly and exposition.

A `Snapshot` is the immutable result of one scrape: every series derived for
the request plus the process-wide constant labels. It quacks like a
`prometheus_client` registry (it has `collect()`), so the stock text encoder
renders it without any per-request registry or metric objects.
"""

from __future__ import annotations

from collections import defaultdict
from typing import DefaultDict, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from prometheus_client.core import GaugeMetricFamily, Metric

from cosmos_exporter import metrics
from cosmos_exporter.domain.models import MetricSeries

__all__ = ["Snapshot", "CONTENT_TYPE_LATEST"]


class Snapshot:
    """
    Ordered, immutable collection of metric series.

    Families are exposed in catalog order; a family without samples is not
    rendered at all.
    """

    def __init__(
        self,
        series: Iterable[MetricSeries],
        const_labels: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._series: Tuple[MetricSeries, ...] = tuple(series)
        self._const_labels: Tuple[Tuple[str, str], ...] = tuple((const_labels or {}).items())

    @property
    def series(self) -> Tuple[MetricSeries, ...]:
        return self._series

    @property
    def const_labels(self) -> Dict[str, str]:
        return dict(self._const_labels)

    def __len__(self) -> int:
        return len(self._series)

    def __iter__(self) -> Iterator[MetricSeries]:
        return iter(self._series)

    def find(self, name: str, **labels: str) -> List[MetricSeries]:
        """Series named `name` whose labels include all of `labels`."""
        return [
            item
            for item in self._series
            if item.name == name
            and all(item.label_dict.get(key) == value for key, value in labels.items())
        ]

    def value(self, name: str, **labels: str) -> Optional[float]:
        """Value of the first matching series, or None when absent."""
        found = self.find(name, **labels)
        return found[0].value if found else None

    def _label_keys(self, spec: metrics.MetricSpec) -> List[str]:
        # Series labels take precedence over a constant label of the same name.
        const_keys = [key for key, _ in self._const_labels if key not in spec.label_keys]
        return const_keys + list(spec.label_keys)

    def collect(self) -> Iterator[Metric]:
        grouped: DefaultDict[str, List[MetricSeries]] = defaultdict(list)
        for item in self._series:
            grouped[item.name].append(item)

        const = dict(self._const_labels)
        for spec in metrics.CATALOG:
            samples = grouped.get(spec.name)
            if not samples:
                continue
            keys = self._label_keys(spec)
            family = GaugeMetricFamily(spec.name, spec.help, labels=keys)
            for item in samples:
                merged = {**const, **item.label_dict}
                family.add_metric([merged.get(key, "") for key in keys], item.value)
            yield family

    def encode(self) -> bytes:
        """Render the snapshot in the Prometheus text exposition format."""
        return generate_latest(self)  # type: ignore[arg-type]
