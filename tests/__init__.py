"""Test suite for pyomdb."""
