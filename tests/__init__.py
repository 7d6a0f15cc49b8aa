"""Test suite for objfile-debuginfo.

Test Structure:
- domain/: Tests for models and the line table / debug stream decoders
- application/: Tests for the ObjectFile facade
- infrastructure/: Tests for the pyelftools backend, location flattening and logging
- config/: Tests for configuration management

Run tests with pytest:
    pytest                    # Run all tests
    pytest -m unit            # Run unit tests only
    pytest -m integration     # Run tests that read real object files
"""
