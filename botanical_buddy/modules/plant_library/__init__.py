"""
Plant Library Module

Read-only, cached access to the Trefle plant species catalogue.
"""
