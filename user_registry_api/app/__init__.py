"""
Application package initializer.

This package contains the main entrypoint for the API and its
submodules: ``core`` (settings, logging, storage and security),
``schemas`` (request and response models), ``services`` (store
access) and ``api`` (versioned routers).
"""

from .main import app  # noqa: F401
