"""HTTP surface for the installer health check."""
