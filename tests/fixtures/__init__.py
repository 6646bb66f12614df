"""Shared test fixtures and data builders."""
