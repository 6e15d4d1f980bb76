"""Domain models, coefficients and validation, free of I/O and logging."""
