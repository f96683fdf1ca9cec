"""Application layer: results, DTOs, interfaces, and services.

Depends on domain; infrastructure implements the interfaces.
"""
