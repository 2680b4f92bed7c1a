"""Command line interface for boundary-lookup."""
