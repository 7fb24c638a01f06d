"""HTB API wire layer: paths, request building, response interpretation."""
