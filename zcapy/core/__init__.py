"""Core pipeline: session context, crypto, errors and API plumbing."""
