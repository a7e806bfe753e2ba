"""HTTP API for the DLMM quoter."""
