"""Input document types and the JSON wire codec."""
