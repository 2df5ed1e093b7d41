"""
Developer tooling for Auth0 Advanced Customization for Universal Login (ACUL).

Fetches upstream example screens, builds them into versioned browser bundles,
and points (or resets) tenant rendering configuration through the Auth0
Management API.
"""

__version__ = "0.1.0"
