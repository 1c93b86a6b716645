"""HTTP API for the job search workflow."""
