"""Compile rule ``use`` chains into engine use descriptors."""
