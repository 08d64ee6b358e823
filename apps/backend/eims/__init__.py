"""EIMS Portal backend (enrollment management API)."""
