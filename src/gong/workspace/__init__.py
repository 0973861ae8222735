"""Dependency workspace layout, import path validation, and provisioning."""
