class InvalidConfiguration(ValueError):
    """Raised when a solver or demo parameter cannot describe a usable grid."""
