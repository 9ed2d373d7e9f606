# Late policy
LATE_PENALTY_FRACTION = 0.10  # flat 10% of points_possible off a late submission, floored at 0
