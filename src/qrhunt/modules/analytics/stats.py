"""Small arithmetic helpers shared by the dashboards."""


def completion_rate(completed: int, total: int) -> int:
    """Whole-number percentage of completed visitors, rounding halves up.

    >>> completion_rate(1, 3)
    33
    >>> completion_rate(1, 8)
    13
    >>> completion_rate(0, 0)
    0
    """
    if total <= 0:
        return 0
    return (200 * completed + total) // (2 * total)
