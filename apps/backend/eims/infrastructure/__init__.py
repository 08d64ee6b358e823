"""Infrastructure adapters (PostgreSQL, in-memory stores, OTP delivery)."""
