"""Infrastructure layer: HTTP request building and response interpretation."""
