"""Options that tune the annotation of ways, relations and changes."""

from __future__ import annotations

from datetime import timedelta
from typing import Callable, Iterable

from osmcore.annotate.core import Options
from osmcore.feature import FeatureID

Option = Callable[[Options], None]

DEFAULT_THRESHOLD = timedelta(minutes=30)


def threshold(duration: timedelta) -> Option:
    """Time range used to group changes when the commit time is unknown.

    Children committed with their parent may carry a timestamp a little
    after it; this range forward-groups such changes.
    """

    def apply(opts: Options) -> None:
        opts.threshold = duration

    return apply


def ignore_inconsistency(yes: bool) -> Option:
    """Match children even when the data is inconsistent.

    Redacted nodes, data from before element versioning and odd editor
    behaviour all leave children that cannot be matched; those are then
    left unannotated instead of raising.
    """

    def apply(opts: Options) -> None:
        opts.ignore_inconsistency = yes

    return apply


def ignore_missing_children(yes: bool) -> Option:
    """Skip children the datasource has no history for."""

    def apply(opts: Options) -> None:
        opts.ignore_missing_children = yes

    return apply


def child_filter(filter_: Callable[[FeatureID], bool]) -> Option:
    """Annotate only the already-annotated children accepted by the filter.

    Children that are not yet annotated are annotated regardless.
    """

    def apply(opts: Options) -> None:
        opts.child_filter = filter_

    return apply


def build_options(
    options: Iterable[Option], default_threshold: timedelta = timedelta(0)
) -> Options:
    """Options starting from the given threshold with each option applied in order."""
    opts = Options(threshold=default_threshold)
    for option in options:
        option(opts)
    return opts