"""Bind FalkorDB Cloud instances to site environment variables."""
