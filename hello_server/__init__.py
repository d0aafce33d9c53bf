"""
Hello Server - Core Package

This package contains the fixed-response HTTP server: configuration loading,
the responder, and the Flask application with its listener startup.
"""

__version__ = "1.0.0"
__author__ = "Hello Server Team"
