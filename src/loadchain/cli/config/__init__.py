"""Show the layered Loadchain configuration."""
