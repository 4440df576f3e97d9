"""
Shared ownership of spline instances

Several scene objects may reference one curve. Ownership is tracked with a
plain reference count that is only touched during the (single-threaded)
build phase. The free functions accept None and do nothing for it, so a
caller never has to guard an optional curve.

SplineRef wraps the bookkeeping in a handle that owns exactly one
reference: share() hands out another owner, close() gives the reference
back, and the last close() destroys the spline.
"""

import logging
from typing import Optional

from .spline import GenericSpline
from ..exceptions import SplineReleasedError

logger = logging.getLogger(__name__)

def acquire_reference(spline: Optional[GenericSpline]) -> Optional[GenericSpline]:
    """Register one more owner"""
    if spline is None:
        return None
    spline._check_alive()
    spline.ref_count += 1
    return spline

def release_reference(spline: Optional[GenericSpline]) -> bool:
    """Drop one owner, destroying the spline when none remain

    Returns:
        True if this call destroyed the spline
    """
    if spline is None:
        return False
    spline._check_alive()

    spline.ref_count -= 1
    if spline.ref_count > 0:
        return False

    spline._teardown()
    return True

def destroy_spline(spline: Optional[GenericSpline]):
    """Tear a spline down regardless of its reference count

    Only for callers certain they are the sole owner.
    """
    if spline is None:
        return
    if spline.destroyed:
        logger.warning(f"destroy_spline called twice on {spline.kind.value}")
        return
    if spline.ref_count > 1:
        logger.warning(f"Destroying {spline.kind.value} with {spline.ref_count} owners left")
    spline._teardown()

def copy_spline(spline: Optional[GenericSpline]) -> Optional[GenericSpline]:
    """Independent deep copy owned by the caller (reference count 1)"""
    if spline is None:
        return None
    return spline.clone()


class SplineRef:
    """Handle owning one reference to a spline

    Usable as a context manager; leaving the block releases the reference.
    """

    def __init__(self, spline: GenericSpline, adopt: bool = False):
        """
        Args:
            spline: Spline to reference
            adopt: Take over a reference the caller already holds instead
                of acquiring a new one
        """
        if not adopt:
            acquire_reference(spline)
        self._spline: Optional[GenericSpline] = spline

    @property
    def spline(self) -> GenericSpline:
        if self._spline is None:
            raise SplineReleasedError("reference has been closed")
        return self._spline

    @property
    def closed(self) -> bool:
        return self._spline is None

    def share(self) -> "SplineRef":
        """New handle on the same spline (one more owner)"""
        return SplineRef(self.spline)

    def copy(self) -> "SplineRef":
        """Handle on an independent clone"""
        return SplineRef(copy_spline(self.spline), adopt=True)

    def close(self) -> bool:
        """Release the reference; closing twice is a no-op"""
        if self._spline is None:
            return False
        spline, self._spline = self._spline, None
        return release_reference(spline)

    def __enter__(self) -> GenericSpline:
        return self.spline

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
        return False

    def __repr__(self):
        return f"SplineRef({self._spline!r})"
