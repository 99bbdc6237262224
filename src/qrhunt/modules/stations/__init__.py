"""Stations (animals) placed around a tenant's grounds."""
