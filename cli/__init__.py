"""page2md command line."""
