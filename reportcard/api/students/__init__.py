"""Student records API resources."""
