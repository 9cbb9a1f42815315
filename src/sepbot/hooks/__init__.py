"""Notification hooks fired at the end of a run."""
