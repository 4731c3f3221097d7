"""GitHub implementation of the issue tracker protocol."""
