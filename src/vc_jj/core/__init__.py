"""Core configuration and the jj backend."""
