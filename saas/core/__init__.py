"""
Core utilities shared across the application.

This package hosts:
- configuration helpers (env vars, storage paths, variant flags)
- cross-cutting helpers such as password hashing, CSRF tokens and the
  single-flight busy guard used by the themed variant.

Services and routers depend on these primitives instead of reading os.environ
directly.
"""
