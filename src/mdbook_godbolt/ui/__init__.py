"""User-facing interfaces of mdbook-godbolt."""
