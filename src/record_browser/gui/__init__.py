"""GUI application for the record browser."""
