"""
Tests for devotees app.
"""
