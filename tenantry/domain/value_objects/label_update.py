"""Label update strategies.

Exactly one strategy applies to an update request:

    KeepLabels: leave labels untouched
    ReplaceLabels: labels become exactly the given map (empty clears)
    MergeLabels: given keys are inserted or overwritten, others preserved

There is no removal under merge; removing a label requires a replace.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True, kw_only=True)
class KeepLabels:
    """Leave labels unchanged."""

    pass


@dataclass(frozen=True, slots=True, kw_only=True)
class ReplaceLabels:
    """Replace all labels.

    Attributes:
        labels: Resulting label map.
    """

    labels: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True, kw_only=True)
class MergeLabels:
    """Overlay a delta onto existing labels.

    Attributes:
        delta: Keys to insert or overwrite.
    """

    delta: Mapping[str, str] = field(default_factory=dict)


type LabelUpdate = KeepLabels | ReplaceLabels | MergeLabels

KEEP_LABELS = KeepLabels()
