"""Chat-facing pipeline -- update parsing, commands, digest, and replies."""
