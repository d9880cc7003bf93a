"""Utility modules for the ipv4check application.

This package contains helpers that sit around the validator, such as reading
candidate addresses from files and standard input.
"""
