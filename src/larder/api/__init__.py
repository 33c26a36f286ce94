"""HTTP API for Larder."""
