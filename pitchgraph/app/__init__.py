"""Application composition layer.

Coordinators in this package build screens, bind them to view models and
drive navigation; ``main`` wires adapters and the root coordinator together.
"""
