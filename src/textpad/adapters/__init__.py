"""Terminal hosts."""
