"""Puzzle completion, redemption codes and the prize desk."""
