"""Adapter package for external I/O implementations.

Purpose:
    Concrete implementations of the domain ports: the player statistics API
    client, the connectivity probe and the JSON-file backed stores.

Dependencies:
    HTTP adapters depend on ``requests``; stores use the filesystem only.
"""
