"""taskdeck - lifecycle and feed views for rewards platform tasks."""
