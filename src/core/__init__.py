"""Core domain package for vxbot.

Core contains link matching, rewriting, preference and dispatch logic without
any Discord or storage-specific code, keeping the business logic portable.
"""
