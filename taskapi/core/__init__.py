"""
Core utilities shared across the task list API.

This package hosts configuration (env vars, paths), the error hierarchy and
logging setup. Repositories and routers depend on these primitives instead of
reading os.environ or configuring handlers themselves.
"""
