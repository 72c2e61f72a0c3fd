"""Sync run orchestration."""
