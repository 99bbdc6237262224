"""Accounts, per-tenant profiles and visitor administration."""
