"""Check-in, clinical summary and insight services."""
