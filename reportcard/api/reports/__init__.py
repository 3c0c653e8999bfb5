"""Report service API resources."""
