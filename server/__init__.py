"""HTTP server exposing the workflow store and validation engine."""
