"""HTTP routers for the person service."""
