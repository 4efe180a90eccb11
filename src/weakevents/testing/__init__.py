"""
Test utilities for weakevents.

Components:
    collect_garbage: Force full garbage collection passes
    assert_collected: Assert a weakly referenced object was reclaimed
    assert_alive: Assert a weakly referenced object survived collection

Example:
    >>> from weakevents.testing import assert_collected
    >>>
    >>> view = View()
    >>> ref = weakref.ref(view)
    >>> model.changed += view.on_changed
    >>> del view
    >>> assert_collected(ref, "view")  # the event did not keep it alive

Note:
    This module is intended for test code only.
"""

from weakevents.testing.liveness import assert_alive, assert_collected, collect_garbage

__all__ = [
    "collect_garbage",
    "assert_collected",
    "assert_alive",
]
