"""Tenant analytics and the platform dashboard."""
