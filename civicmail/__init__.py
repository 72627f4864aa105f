"""Notification gating and digest aggregation for participation platforms."""
