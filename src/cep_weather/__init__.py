"""
cep_weather

Top-level package for the CEP → temperature lookup services (gateway, orchestrator,
and the single-process variant).

Responsibilities:
- Expose package version metadata.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"


# --- Module Notes -----------------------------------------------------------
# Keep this file minimal to avoid import-time side effects across the codebase.
