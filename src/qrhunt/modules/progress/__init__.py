"""Visitor progress: the game board and QR scans."""
