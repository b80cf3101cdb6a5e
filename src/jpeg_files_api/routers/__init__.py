"""HTTP routers for the JPEG Files API."""
