"""Tenants, their branding and platform lifecycle."""
