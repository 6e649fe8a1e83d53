"""Test suite for split-stream."""
