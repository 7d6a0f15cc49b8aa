"""decoding tests."""
