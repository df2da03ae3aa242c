"""Run mode resolution from installed and target versions."""

from enum import Enum

from packaging.version import Version

from ..utils.version import same_major_minor


class Mode(str, Enum):
    """What a lint invocation does."""

    NOOP = "noop"  # same major.minor, nothing to check
    UPGRADE = "upgrade"
    REJECTED_DOWNGRADE = "rejected-downgrade"


def resolve_mode(current: Version, target: Version | None) -> Mode:
    """Decide the run mode.

    Rules apply in order: same major.minor is a no-op (so 3.0.2 -> 3.0.0 is
    not a downgrade), an older target is rejected, anything else upgrades.
    A missing target means the installed version.
    """
    if target is None or same_major_minor(current, target):
        return Mode.NOOP
    if target < current:
        return Mode.REJECTED_DOWNGRADE
    return Mode.UPGRADE
