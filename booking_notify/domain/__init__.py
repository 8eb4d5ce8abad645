"""Domain layer for the booking notifier."""
