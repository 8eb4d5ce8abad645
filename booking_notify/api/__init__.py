"""HTTP surface of the booking notifier: change-feed trigger and health."""
