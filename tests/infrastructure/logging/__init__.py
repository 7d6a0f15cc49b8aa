"""logging tests."""
