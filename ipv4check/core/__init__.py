"""Core components for the ipv4check application.

This package contains the fundamental building blocks of the validation
engine: the pure IPv4 gates, the base class for gate validators, the
configuration manager, and the validation pipeline.
"""
