"""Shared utilities for the BLE scan dashboard."""
