"""Command-line tools that run against the catalog without the web server."""
