"""Test helper modules for the Loadchain test suite."""
