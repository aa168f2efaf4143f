"""CLI sub-command groups registered by ``templategen.main``."""
