"""Staff and cross-tenant membership administration."""
