"""Crosscutting concerns: config, logging, errors, middleware, pagination."""
