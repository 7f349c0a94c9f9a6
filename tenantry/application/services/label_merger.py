"""Label merging.

``merge_labels`` is pure and never fails. Conflicting input (both a replace
and a merge map) is rejected earlier by ``label_strategy_from_request``.

Usage:
    match label_strategy_from_request(replace=cmd.replace_labels, merge=cmd.merge_labels):
        case Success(value=strategy):
            space.labels = merge_labels(space.labels, strategy)
"""

from collections.abc import Mapping

from tenantry.core.enums import ErrorCode
from tenantry.core.errors import ValidationError
from tenantry.core.result import Failure, Result, Success
from tenantry.core.validation import validate_labels
from tenantry.domain.value_objects import (
    KEEP_LABELS,
    KeepLabels,
    LabelUpdate,
    MergeLabels,
    ReplaceLabels,
)


def merge_labels(existing: Mapping[str, str], strategy: LabelUpdate) -> dict[str, str]:
    """Compute the labels resulting from ``strategy``.

    Args:
        existing: Current labels.
        strategy: Keep, replace or merge.

    Returns:
        A new label map; ``existing`` is never modified.
    """
    match strategy:
        case ReplaceLabels(labels=labels):
            return dict(labels)
        case MergeLabels(delta=delta):
            merged = dict(existing)
            merged.update(delta)
            return merged
        case KeepLabels():
            return dict(existing)


def label_strategy_from_request(
    *,
    replace: Mapping[str, str] | None = None,
    merge: Mapping[str, str] | None = None,
) -> Result[LabelUpdate, ValidationError]:
    """Build the label strategy for an update request.

    Args:
        replace: Labels replacing all existing ones (empty map clears).
        merge: Labels merged into existing ones.

    Returns:
        Success with the strategy, or Failure when both maps are supplied or
        a map is malformed.
    """
    if replace is not None and merge is not None:
        return Failure(
            error=ValidationError(
                code=ErrorCode.LABEL_STRATEGY_CONFLICT,
                message="Cannot both replace and merge labels",
                field="labels",
            )
        )
    if replace is not None:
        validated = validate_labels(replace, "replace_labels")
        if isinstance(validated, Failure):
            return validated
        return Success(value=ReplaceLabels(labels=validated.value))
    if merge is not None:
        validated = validate_labels(merge, "merge_labels")
        if isinstance(validated, Failure):
            return validated
        return Success(value=MergeLabels(delta=validated.value))
    return Success(value=KEEP_LABELS)
