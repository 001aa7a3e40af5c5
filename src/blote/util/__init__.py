"""Small reusable data structures.

Re-exports public symbols so callers can write::

    from blote.util import FixedLengthQueue
"""

from blote.util.queue import FixedLengthQueue, QueueError

__all__ = ["FixedLengthQueue", "QueueError"]
