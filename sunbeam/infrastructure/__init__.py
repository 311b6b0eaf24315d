"""Infrastructure: configuration, logging and the storefront client."""
