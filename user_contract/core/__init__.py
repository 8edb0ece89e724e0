"""Core contract verification engine: client, tracker, pagination, verifier."""
