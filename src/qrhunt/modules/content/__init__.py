"""Editable site texts, per tenant."""
