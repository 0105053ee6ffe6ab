"""Schedule snapshot and status message rendering."""

from .renderer import build_description, build_status_embed
from .snapshot import StatusSnapshot, VendorStatus, build_snapshot, evaluate_vendor

__all__ = [
    "build_description",
    "build_status_embed",
    "StatusSnapshot",
    "VendorStatus",
    "build_snapshot",
    "evaluate_vendor",
]
