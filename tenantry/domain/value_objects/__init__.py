"""Domain value objects."""

from tenantry.domain.value_objects.credential import Credential
from tenantry.domain.value_objects.label_update import (
    KEEP_LABELS,
    KeepLabels,
    LabelUpdate,
    MergeLabels,
    ReplaceLabels,
)
from tenantry.domain.value_objects.permission import Permission
from tenantry.domain.value_objects.query import (
    LIKE_ESCAPE,
    QueryPlan,
    QueryResult,
    QuerySpec,
    VisibilityPredicate,
    glob_to_like,
)

__all__ = [
    "Credential",
    "KEEP_LABELS",
    "KeepLabels",
    "LIKE_ESCAPE",
    "LabelUpdate",
    "MergeLabels",
    "Permission",
    "QueryPlan",
    "QueryResult",
    "QuerySpec",
    "ReplaceLabels",
    "VisibilityPredicate",
    "glob_to_like",
]
