"""
Month header for the contribution heatmap.
"""

MONTHS = [
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
]


def month_labels(current_month0: int, total_weeks: int) -> list[str]:
    """
    Return the month abbreviations to print above the grid, oldest first.

    The grid covers a rolling year ending this month, so the header starts
    at the month after the current one and wraps around to end on it.

    Args:
        current_month0: Current month, 0 = January
        total_weeks: Number of weeks in the grid

    Returns:
        12 labels, or an empty list when there is no grid to label
    """
    if total_weeks == 0:
        return []

    start_month = (current_month0 + 1) % 12
    return [MONTHS[(start_month + i) % 12] for i in range(12)]
