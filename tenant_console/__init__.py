"""
Tenant Console - operator console for a multi-tenant SaaS platform

A thin service over the platform backend that manages tenants and their
modules and derives endpoint health and error summaries from request logs.
"""

__version__ = "1.0.0"
