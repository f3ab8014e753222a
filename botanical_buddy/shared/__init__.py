"""
Shared kernel: configuration, exceptions, security, persistence, caching and
external API plumbing used by every module.
"""
