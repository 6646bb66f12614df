#!/usr/bin/env python3
"""
End-to-end tests for the txsummary package.

These tests execute the CLI via subprocess against synthetic transaction
files to validate behavior from the user's perspective.
"""
