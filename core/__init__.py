"""
Core Module

Contains fundamental functionality:
- errors: Error taxonomy (ParseError, FilesystemError)
- logging: Diagnostic logging infrastructure
"""
