"""Shared utilities: datetime and generators."""

from gatekeeper.shared.utils.datetime import utc_now
from gatekeeper.shared.utils.generators import generate_cuid

__all__ = ["generate_cuid", "utc_now"]
