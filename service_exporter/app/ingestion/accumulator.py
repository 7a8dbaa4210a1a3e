"""
Per-scrape gauge storage.
"""

from dataclasses import dataclass
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from prometheus_client.core import GaugeMetricFamily

from shared.logging import get_logger


@dataclass(frozen=True)
class GaugeSpec:
    """A gauge declared for one scrape."""
    name: str
    documentation: str
    labelnames: Tuple[str, ...] = ()


class MetricAccumulator:
    """Named gauge slots filled by concurrent query tasks during one scrape.

    Slots are last-write-wins. A slot that is never set is left out of the
    exposition entirely. Each task owns its own slots and all writes happen on
    the event loop thread, so no locking is done here.

    Implements the prometheus_client custom collector protocol so a
    ``CollectorRegistry`` can render it directly.
    """

    def __init__(self, const_labels: Optional[Mapping[str, str]] = None):
        self.const_labels: Dict[str, str] = dict(const_labels or {})
        self.logger = get_logger("exporter.accumulator")
        self._specs: Dict[str, GaugeSpec] = {}
        self._values: Dict[str, Dict[Tuple[str, ...], float]] = {}

    def declare(self, name: str, documentation: str, labelnames: Tuple[str, ...] = ()) -> GaugeSpec:
        if name in self._specs:
            raise ValueError(f"Gauge {name} already declared")

        clashing = set(labelnames) & set(self.const_labels)
        if clashing:
            raise ValueError(f"Gauge {name} labels clash with constant labels: {sorted(clashing)}")

        spec = GaugeSpec(name=name, documentation=documentation, labelnames=tuple(labelnames))
        self._specs[name] = spec
        self._values[name] = {}
        return spec

    def set(self, name: str, value: float, **labels: str) -> None:
        """Set a slot, overwriting any earlier value for the same labels."""
        key = self._slot_key(name, labels)
        self._values[name][key] = float(value)

    def get(self, name: str, **labels: str) -> Optional[float]:
        key = self._slot_key(name, labels)
        return self._values[name].get(key)

    def samples(self, name: str) -> Dict[Tuple[str, ...], float]:
        """All set slots of a gauge keyed by their own label values."""
        if name not in self._specs:
            raise KeyError(name)
        return dict(self._values[name])

    def is_set(self, name: str, **labels: str) -> bool:
        return self.get(name, **labels) is not None

    @property
    def names(self) -> List[str]:
        return list(self._specs)

    def _slot_key(self, name: str, labels: Mapping[str, str]) -> Tuple[str, ...]:
        spec = self._specs.get(name)
        if spec is None:
            raise KeyError(f"Gauge {name} is not declared")

        if set(labels) != set(spec.labelnames):
            raise ValueError(
                f"Gauge {name} expects labels {list(spec.labelnames)}, got {sorted(labels)}"
            )

        return tuple(str(labels[label]) for label in spec.labelnames)

    def collect(self) -> Iterator[GaugeMetricFamily]:
        const_names = list(self.const_labels)
        const_values = [self.const_labels[label] for label in const_names]

        for name, spec in self._specs.items():
            family = GaugeMetricFamily(
                name,
                spec.documentation,
                labels=const_names + list(spec.labelnames)
            )
            for label_values, value in self._values[name].items():
                family.add_metric(const_values + list(label_values), value)
            yield family
