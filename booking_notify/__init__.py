"""
booking-notify - change-driven push notifications for booking records.

Reacts to before/after writes of booking records, decides per recipient
role whether the write warrants a push notification, fans the payload out
to every registered device token in one gateway batch, and prunes tokens
the gateway reports as permanently invalid.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
