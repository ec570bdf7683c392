"""HTTP API for dashboard widgets."""
